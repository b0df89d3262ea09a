"""Event assignments: a person filling one unit of one event slot."""

import uuid

from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class EventAssignment(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "event_assignments"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    event_id: uuid.UUID = Field(
        foreign_key="events.id", ondelete="CASCADE", nullable=False, index=True
    )
    slot_id: uuid.UUID = Field(
        foreign_key="event_slots.id", ondelete="CASCADE", nullable=False, index=True
    )
    user_id: uuid.UUID = Field(
        foreign_key="tenant_users.person_id", ondelete="CASCADE", nullable=False, index=True
    )
