"""Skill incompatibility blacklist.

A row means the two skills may never be held by one person within one event.
Pairs are unordered and stored canonically with skill_id_1 < skill_id_2.
"""

import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin


class SkillIncompatibility(CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "skill_incompatibilities"
    __table_args__ = (
        sa.CheckConstraint("skill_id_1 < skill_id_2", name="ck_skill_incompatibilities_ordered"),
    )

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", primary_key=True
    )
    skill_id_1: uuid.UUID = Field(
        foreign_key="skills.id", ondelete="CASCADE", primary_key=True, index=True
    )
    skill_id_2: uuid.UUID = Field(
        foreign_key="skills.id", ondelete="CASCADE", primary_key=True, index=True
    )
