"""
Team membership and skill-grant endpoints.
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import RequestContext, require_tenant_manager, require_tenant_member
from app.core.database import get_session
from app.services import members as member_service
from staffing_shared.schemas.common import SuccessResponse
from staffing_shared.schemas.teams import (
    MemberSkillAssign,
    MemberSkillDetail,
    MemberSkillRead,
    MemberSkillUpdate,
    TeamMemberAdd,
    TeamMemberDetail,
    TeamMemberRead,
    TeamMemberUpdate,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


@router.post("/teams/{team_id}/members", response_model=TeamMemberRead, status_code=201)
async def add_team_member(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    member_in: TeamMemberAdd,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    """Add an active user (seat holder) of the tenant to a team."""
    member = await member_service.add_member(session, tenant_id, team_id, member_in)
    await session.commit()
    await session.refresh(member)
    return member


@router.get("/teams/{team_id}/members", response_model=List[TeamMemberDetail])
async def list_team_members(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await member_service.list_members(session, tenant_id, team_id)


@router.patch("/teams/{team_id}/members/{user_id}", response_model=TeamMemberRead)
async def update_team_member(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    user_id: uuid.UUID,
    member_in: TeamMemberUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    member = await member_service.update_member(session, tenant_id, team_id, user_id, member_in)
    await session.commit()
    await session.refresh(member)
    return member


@router.delete("/teams/{team_id}/members/{user_id}", response_model=SuccessResponse)
async def remove_team_member(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    user_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await member_service.remove_member(session, tenant_id, team_id, user_id)
    await session.commit()
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Skill grants
# ---------------------------------------------------------------------------


@router.post(
    "/members/{team_member_id}/skills", response_model=MemberSkillRead, status_code=201
)
async def assign_member_skill(
    tenant_id: uuid.UUID,
    team_member_id: uuid.UUID,
    grant_in: MemberSkillAssign,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    grant = await member_service.assign_member_skill(session, tenant_id, team_member_id, grant_in)
    await session.commit()
    await session.refresh(grant)
    return grant


@router.get("/members/{team_member_id}/skills", response_model=List[MemberSkillDetail])
async def list_member_skills(
    tenant_id: uuid.UUID,
    team_member_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await member_service.list_member_skills(session, tenant_id, team_member_id)


@router.patch("/members/{team_member_id}/skills/{skill_id}", response_model=MemberSkillRead)
async def update_member_skill(
    tenant_id: uuid.UUID,
    team_member_id: uuid.UUID,
    skill_id: uuid.UUID,
    grant_in: MemberSkillUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    grant = await member_service.update_member_skill(
        session, tenant_id, team_member_id, skill_id, grant_in
    )
    await session.commit()
    await session.refresh(grant)
    return grant


@router.delete("/members/{team_member_id}/skills/{skill_id}", response_model=SuccessResponse)
async def remove_member_skill(
    tenant_id: uuid.UUID,
    team_member_id: uuid.UUID,
    skill_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await member_service.remove_member_skill(session, tenant_id, team_member_id, skill_id)
    await session.commit()
    return SuccessResponse()
