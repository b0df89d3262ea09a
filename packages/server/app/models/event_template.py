"""Reusable event templates and their slot requirements."""

from typing import Optional
import uuid

from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class EventTemplate(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "event_templates"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    name: str = Field(nullable=False)
    description: Optional[str] = None


class EventTemplateSlot(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "event_template_slots"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    template_id: uuid.UUID = Field(
        foreign_key="event_templates.id", ondelete="CASCADE", nullable=False, index=True
    )
    team_id: uuid.UUID = Field(foreign_key="teams.id", ondelete="CASCADE", nullable=False)
    skill_id: uuid.UUID = Field(foreign_key="skills.id", ondelete="CASCADE", nullable=False)
    quantity: int = Field(default=1, nullable=False)
