"""
Event schemas: templates, template slots, events, event slots and
assignments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from .common import EventStatus


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class EventTemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None


class EventTemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None


class EventTemplateRead(BaseModel):
    id: UUID
    tenant_id: UUID
    name: str
    description: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SlotCreate(BaseModel):
    """A requirement for `quantity` people from `team_id` holding `skill_id`."""
    team_id: UUID
    skill_id: UUID
    quantity: int = Field(default=1, ge=1)


class SlotUpdate(BaseModel):
    quantity: Optional[int] = Field(default=None, ge=1)


class EventTemplateSlotRead(BaseModel):
    id: UUID
    tenant_id: UUID
    template_id: UUID
    team_id: UUID
    skill_id: UUID
    quantity: int
    created_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class EventCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    date: datetime
    template_id: Optional[UUID] = None


class EventUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    date: Optional[datetime] = None
    status: Optional[EventStatus] = None


class EventRead(BaseModel):
    id: UUID
    tenant_id: UUID
    template_id: Optional[UUID] = None
    name: str
    date: datetime
    status: EventStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class EventSlotRead(BaseModel):
    id: UUID
    tenant_id: UUID
    event_id: UUID
    team_id: UUID
    skill_id: UUID
    quantity: int
    created_at: datetime

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------

class AssignmentCreate(BaseModel):
    slot_id: UUID
    user_id: UUID


class AssignmentRead(BaseModel):
    id: UUID
    tenant_id: UUID
    event_id: UUID
    slot_id: UUID
    user_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}
