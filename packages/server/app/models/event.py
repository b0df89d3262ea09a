"""Events and their slots.

Slots are a snapshot of the template's slots taken when the event is
created; `template_id` is provenance only and is nulled if the template goes.
"""

from datetime import datetime
from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class Event(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "events"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    template_id: Optional[uuid.UUID] = Field(
        default=None, foreign_key="event_templates.id", ondelete="SET NULL", nullable=True
    )
    name: str = Field(nullable=False)
    date: datetime = Field(nullable=False, sa_type=sa.DateTime(timezone=True))
    status: str = Field(default="draft", nullable=False)  # draft | published | completed | cancelled


class EventSlot(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "event_slots"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    event_id: uuid.UUID = Field(
        foreign_key="events.id", ondelete="CASCADE", nullable=False, index=True
    )
    team_id: uuid.UUID = Field(foreign_key="teams.id", ondelete="CASCADE", nullable=False)
    skill_id: uuid.UUID = Field(foreign_key="skills.id", ondelete="CASCADE", nullable=False)
    quantity: int = Field(default=1, nullable=False)
