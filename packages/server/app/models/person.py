"""People and seats.

A Person is a roster entry of one tenant. A TenantUser row grants that person
a seat (login access); only those "active users" can join teams or be
assigned to events.
"""

from datetime import datetime, timezone
from typing import Optional
import uuid

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import CreatedAtMixin, UUIDMixin


class Person(UUIDMixin, CreatedAtMixin, SQLModel, table=True):
    __tablename__ = "people"

    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id", ondelete="CASCADE", nullable=False, index=True
    )
    email: Optional[str] = Field(default=None, unique=True, index=True)
    display_name: str = Field(nullable=False)
    role: Optional[str] = Field(default=None)  # None = member | owner | admin


class TenantUser(SQLModel, table=True):
    __tablename__ = "tenant_users"

    person_id: uuid.UUID = Field(
        foreign_key="people.id", ondelete="CASCADE", primary_key=True
    )
    activated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
    )
