"""
Assignment endpoints.

POST runs the eligibility checks in app.services.assignments. When the
assignment lock is enabled the checks and the commit happen while holding a
per-(tenant, event, user) Redis lock.
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import RequestContext, require_tenant_manager, require_tenant_member
from app.core.database import get_session
from app.core.locks import assignment_lock
from app.services import assignments as assignment_service
from staffing_shared.schemas.common import SuccessResponse
from staffing_shared.schemas.events import AssignmentCreate, AssignmentRead

router = APIRouter()


@router.post("/events/{event_id}/assignments", response_model=AssignmentRead, status_code=201)
async def create_assignment(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    body: AssignmentCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    async with assignment_lock(tenant_id, event_id, body.user_id):
        assignment = await assignment_service.create_assignment(
            session, tenant_id, event_id, body.slot_id, body.user_id
        )
        await assignment_service.commit_assignment(session, assignment)
    await session.refresh(assignment)
    return assignment


@router.get("/events/{event_id}/assignments", response_model=List[AssignmentRead])
async def list_assignments(
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await assignment_service.list_assignments(session, tenant_id, event_id)


@router.delete("/assignments/{assignment_id}", response_model=SuccessResponse)
async def delete_assignment(
    tenant_id: uuid.UUID,
    assignment_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await assignment_service.delete_assignment(session, tenant_id, assignment_id)
    await session.commit()
    return SuccessResponse()
