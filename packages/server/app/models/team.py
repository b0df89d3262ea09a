"""Teams and the skills each team owns."""

from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class Team(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "teams"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    name: str = Field(nullable=False)
    description: Optional[str] = None


class Skill(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "skills"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    team_id: uuid.UUID = Field(
        foreign_key="teams.id", ondelete="CASCADE", nullable=False, index=True
    )
    name: str = Field(nullable=False)
