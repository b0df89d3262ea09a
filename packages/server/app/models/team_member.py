"""Team membership and per-membership skill grants."""

from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class TeamMember(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "team_members"
    __table_args__ = (
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
    )

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    team_id: uuid.UUID = Field(
        foreign_key="teams.id", ondelete="CASCADE", nullable=False, index=True
    )
    # Only active users (seat holders) can be team members
    user_id: uuid.UUID = Field(
        foreign_key="tenant_users.person_id", ondelete="CASCADE", nullable=False, index=True
    )
    role: Optional[str] = None


class MemberSkill(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "member_skills"
    __table_args__ = (
        sa.UniqueConstraint("team_member_id", "skill_id", name="uq_member_skills_member_skill"),
    )

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    team_member_id: uuid.UUID = Field(
        foreign_key="team_members.id", ondelete="CASCADE", nullable=False, index=True
    )
    skill_id: uuid.UUID = Field(
        foreign_key="skills.id", ondelete="CASCADE", nullable=False, index=True
    )
    proficiency_level: Optional[int] = None
