"""Staffing schema: tenants, people, teams, skills, templates, events, assignments.

Revision ID: 0001_staffing_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001_staffing_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid() -> postgresql.UUID:
    return postgresql.UUID(as_uuid=True)


def _tenant_fk() -> sa.Column:
    return sa.Column(
        "tenant_id", _uuid(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")
    )


# ---------------------------------------------------------------------------
# UPGRADE
# ---------------------------------------------------------------------------


def upgrade() -> None:
    # -----------------------------------------------------------------------
    # 1. Tenancy and people (owned elsewhere, referenced here)
    # -----------------------------------------------------------------------

    op.create_table(
        "tenants",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_tenants_slug", "tenants", ["slug"], unique=True)

    op.create_table(
        "people",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("role", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_people_tenant_id", "people", ["tenant_id"])
    op.create_index("ix_people_email", "people", ["email"], unique=True)

    op.create_table(
        "tenant_users",
        sa.Column(
            "person_id", _uuid(), sa.ForeignKey("people.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "activated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")
        ),
    )

    # -----------------------------------------------------------------------
    # 2. Team catalog
    # -----------------------------------------------------------------------

    op.create_table(
        "teams",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_teams_tenant_id", "teams", ["tenant_id"])

    op.create_table(
        "skills",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("team_id", _uuid(), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        _created_at(),
    )
    op.create_index("ix_skills_tenant_id", "skills", ["tenant_id"])
    op.create_index("ix_skills_team_id", "skills", ["team_id"])

    op.create_table(
        "team_members",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("team_id", _uuid(), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "user_id",
            _uuid(),
            sa.ForeignKey("tenant_users.person_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("role", sa.Text(), nullable=True),
        _created_at(),
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_members_team_user"),
    )
    op.create_index("ix_team_members_tenant_id", "team_members", ["tenant_id"])
    op.create_index("ix_team_members_team_id", "team_members", ["team_id"])
    op.create_index("ix_team_members_user_id", "team_members", ["user_id"])

    op.create_table(
        "member_skills",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "team_member_id",
            _uuid(),
            sa.ForeignKey("team_members.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("skill_id", _uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
        sa.Column("proficiency_level", sa.Integer(), nullable=True),
        _created_at(),
        sa.UniqueConstraint("team_member_id", "skill_id", name="uq_member_skills_member_skill"),
    )
    op.create_index("ix_member_skills_tenant_id", "member_skills", ["tenant_id"])
    op.create_index("ix_member_skills_team_member_id", "member_skills", ["team_member_id"])
    op.create_index("ix_member_skills_skill_id", "member_skills", ["skill_id"])

    op.create_table(
        "skill_incompatibilities",
        sa.Column(
            "tenant_id", _uuid(), sa.ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "skill_id_1", _uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "skill_id_2", _uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), primary_key=True
        ),
        _created_at(),
        sa.CheckConstraint("skill_id_1 < skill_id_2", name="ck_skill_incompatibilities_ordered"),
    )
    op.create_index("ix_skill_incompatibilities_skill_id_1", "skill_incompatibilities", ["skill_id_1"])
    op.create_index("ix_skill_incompatibilities_skill_id_2", "skill_incompatibilities", ["skill_id_2"])

    # -----------------------------------------------------------------------
    # 3. Templates and events
    # -----------------------------------------------------------------------

    op.create_table(
        "event_templates",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_event_templates_tenant_id", "event_templates", ["tenant_id"])

    op.create_table(
        "event_template_slots",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "template_id",
            _uuid(),
            sa.ForeignKey("event_templates.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("team_id", _uuid(), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("skill_id", _uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        _created_at(),
    )
    op.create_index("ix_event_template_slots_tenant_id", "event_template_slots", ["tenant_id"])
    op.create_index("ix_event_template_slots_template_id", "event_template_slots", ["template_id"])

    op.create_table(
        "events",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column(
            "template_id",
            _uuid(),
            sa.ForeignKey("event_templates.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default="draft"),
        _created_at(),
    )
    op.create_index("ix_events_tenant_id", "events", ["tenant_id"])

    op.create_table(
        "event_slots",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("event_id", _uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("team_id", _uuid(), sa.ForeignKey("teams.id", ondelete="CASCADE"), nullable=False),
        sa.Column("skill_id", _uuid(), sa.ForeignKey("skills.id", ondelete="CASCADE"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default="1"),
        _created_at(),
    )
    op.create_index("ix_event_slots_tenant_id", "event_slots", ["tenant_id"])
    op.create_index("ix_event_slots_event_id", "event_slots", ["event_id"])

    op.create_table(
        "event_assignments",
        sa.Column("id", _uuid(), primary_key=True),
        _tenant_fk(),
        sa.Column("event_id", _uuid(), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "slot_id", _uuid(), sa.ForeignKey("event_slots.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "user_id",
            _uuid(),
            sa.ForeignKey("tenant_users.person_id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
    )
    op.create_index("ix_event_assignments_tenant_id", "event_assignments", ["tenant_id"])
    op.create_index("ix_event_assignments_slot_id", "event_assignments", ["slot_id"])
    op.create_index("ix_event_assignments_user_id", "event_assignments", ["user_id"])
    # Eligibility looks up a user's other assignments within one event.
    op.create_index(
        "ix_event_assignments_event_user", "event_assignments", ["event_id", "user_id"]
    )


# ---------------------------------------------------------------------------
# DOWNGRADE
# ---------------------------------------------------------------------------


def downgrade() -> None:
    # Reverse dependency order
    op.drop_table("event_assignments")
    op.drop_table("event_slots")
    op.drop_table("events")
    op.drop_table("event_template_slots")
    op.drop_table("event_templates")
    op.drop_table("skill_incompatibilities")
    op.drop_table("member_skills")
    op.drop_table("team_members")
    op.drop_table("skills")
    op.drop_table("teams")
    op.drop_table("tenant_users")
    op.drop_table("people")
    op.drop_table("tenants")
