# SQLModel definitions; importing them populates the metadata for Alembic.
from .base import UUIDMixin, CreatedAtMixin  # noqa: F401
from .tenant import Tenant  # noqa: F401
from .person import Person, TenantUser  # noqa: F401
from .team import Team, Skill  # noqa: F401
from .team_member import TeamMember, MemberSkill  # noqa: F401
from .skill_incompatibility import SkillIncompatibility  # noqa: F401
from .event_template import EventTemplate, EventTemplateSlot  # noqa: F401
from .event import Event, EventSlot  # noqa: F401
from .assignments import EventAssignment  # noqa: F401
