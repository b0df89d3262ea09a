"""
Event template endpoints: templates and their slot requirements.
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
    EventTemplateCreate,
    EventTemplateRead,
    EventTemplateSlotRead,
    EventTemplateUpdate,
    SlotCreate,
    SlotUpdate,
)

router = APIRouter()


@router.post("/event-templates", response_model=EventTemplateRead, status_code=201)
async def create_template(
    tenant_id: uuid.UUID,
    template_in: EventTemplateCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    template = await event_service.create_template(session, tenant_id, template_in)
    await session.commit()
    await session.refresh(template)
    return template


@router.get("/event-templates", response_model=List[EventTemplateRead])
async def list_templates(
    tenant_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await event_service.list_templates(session, tenant_id)


@router.get("/event-templates/{template_id}", response_model=EventTemplateRead)
async def get_template(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await event_service.get_template_or_404(session, tenant_id, template_id)


@router.patch("/event-templates/{template_id}", response_model=EventTemplateRead)
async def update_template(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    template_in: EventTemplateUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    template = await event_service.update_template(session, tenant_id, template_id, template_in)
    await session.commit()
    await session.refresh(template)
    return template


@router.delete("/event-templates/{template_id}", response_model=SuccessResponse)
async def delete_template(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    """Delete a template; events created from it are left untouched."""
    await event_service.delete_template(session, tenant_id, template_id)
    await session.commit()
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Template slots
# ---------------------------------------------------------------------------


@router.post(
    "/event-templates/{template_id}/slots",
    response_model=EventTemplateSlotRead,
    status_code=201,
)
async def create_template_slot(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    slot_in: SlotCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    slot = await event_service.create_template_slot(session, tenant_id, template_id, slot_in)
    await session.commit()
    await session.refresh(slot)
    return slot


@router.get("/event-templates/{template_id}/slots", response_model=List[EventTemplateSlotRead])
async def list_template_slots(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    await event_service.get_template_or_404(session, tenant_id, template_id)
    return await event_service.list_template_slots(session, tenant_id, template_id)


@router.patch(
    "/event-templates/{template_id}/slots/{slot_id}", response_model=EventTemplateSlotRead
)
async def update_template_slot(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    slot_id: uuid.UUID,
    slot_in: SlotUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    slot = await event_service.update_template_slot(
        session, tenant_id, template_id, slot_id, slot_in
    )
    await session.commit()
    await session.refresh(slot)
    return slot


@router.delete(
    "/event-templates/{template_id}/slots/{slot_id}", response_model=SuccessResponse
)
async def delete_template_slot(
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    slot_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await event_service.delete_template_slot(session, tenant_id, template_id, slot_id)
    await session.commit()
    return SuccessResponse()
