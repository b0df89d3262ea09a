"""
Event endpoints: events and their slots.

Creating an event from a template copies the template's slots onto the
event; later edits on either side do not propagate.
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import RequestContext, require_tenant_manager, require_tenant_member
from app.core.database import get_session
from app.services import events as event_service
from staffing_shared.schemas.common import SuccessResponse
from staffing_shared.schemas.events import (
    EventCreate,
    EventRead,
    EventSlotRead,
    EventUpdate,
    SlotCreate,
    SlotUpdate,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@router.post("/events", response_model=EventRead, status_code=201)
async def create_event(
    tenant_id: uuid.UUID,
    event_in: EventCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    """Create a draft event, optionally seeded from a template."""
    event = await event_service.create_event(session, tenant_id, event_in)
    await session.commit()
    await session.refresh(event)
    return event


@router.get("/events", response_model=List[EventRead])
async def list_events(
    tenant_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await event_service.list_events(session, tenant_id)


@router.get("/events/{event_id}", response_model=EventRead)
async def get_event(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await event_service.get_event_or_404(session, tenant_id, event_id)


@router.patch("/events/{event_id}", response_model=EventRead)
async def update_event(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    event_in: EventUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    event = await event_service.update_event(session, tenant_id, event_id, event_in)
    await session.commit()
    await session.refresh(event)
    return event


@router.delete("/events/{event_id}", response_model=SuccessResponse)
async def delete_event(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await event_service.delete_event(session, tenant_id, event_id)
    await session.commit()
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Event slots
# ---------------------------------------------------------------------------


@router.post("/events/{event_id}/slots", response_model=EventSlotRead, status_code=201)
async def create_event_slot(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    slot_in: SlotCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    slot = await event_service.create_slot(session, tenant_id, event_id, slot_in)
    await session.commit()
    await session.refresh(slot)
    return slot


@router.get("/events/{event_id}/slots", response_model=List[EventSlotRead])
async def list_event_slots(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    await event_service.get_event_or_404(session, tenant_id, event_id)
    return await event_service.list_slots(session, tenant_id, event_id)


@router.patch("/events/{event_id}/slots/{slot_id}", response_model=EventSlotRead)
async def update_event_slot(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    slot_id: uuid.UUID,
    slot_in: SlotUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    slot = await event_service.update_slot(session, tenant_id, event_id, slot_id, slot_in)
    await session.commit()
    await session.refresh(slot)
    return slot


@router.delete("/events/{event_id}/slots/{slot_id}", response_model=SuccessResponse)
async def delete_event_slot(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    slot_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await event_service.delete_slot(session, tenant_id, event_id, slot_id)
    await session.commit()
    return SuccessResponse()
