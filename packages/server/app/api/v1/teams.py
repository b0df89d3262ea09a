"""
Team catalog endpoints: teams, team-owned skills and the tenant's
skill-incompatibility blacklist.

Reads are open to any member of the tenant; writes need owner/admin.
"""

from __future__ import annotations

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import RequestContext, require_tenant_manager, require_tenant_member
from app.core.database import get_session
from app.services import teams as team_service
from staffing_shared.schemas.common import SuccessResponse
from staffing_shared.schemas.teams import (
    SkillCreate,
    SkillIncompatibilityCreate,
    SkillIncompatibilityDetail,
    SkillIncompatibilityRead,
    SkillRead,
    SkillUpdate,
    TeamCreate,
    TeamRead,
    TeamUpdate,
)

router = APIRouter()


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------


@router.post("/teams", response_model=TeamRead, status_code=201)
async def create_team(
    tenant_id: uuid.UUID,
    team_in: TeamCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    team = await team_service.create_team(session, tenant_id, team_in)
    await session.commit()
    await session.refresh(team)
    return team


@router.get("/teams", response_model=List[TeamRead])
async def list_teams(
    tenant_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await team_service.list_teams(session, tenant_id)


@router.get("/teams/{team_id}", response_model=TeamRead)
async def get_team(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await team_service.get_team_or_404(session, tenant_id, team_id)


@router.patch("/teams/{team_id}", response_model=TeamRead)
async def update_team(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    team_in: TeamUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    team = await team_service.update_team(session, tenant_id, team_id, team_in)
    await session.commit()
    await session.refresh(team)
    return team


@router.delete("/teams/{team_id}", response_model=SuccessResponse)
async def delete_team(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    """Delete a team. Its skills, memberships and slots go with it."""
    await team_service.delete_team(session, tenant_id, team_id)
    await session.commit()
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------


@router.post("/teams/{team_id}/skills", response_model=SkillRead, status_code=201)
async def create_skill(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    skill_in: SkillCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    skill = await team_service.create_skill(session, tenant_id, team_id, skill_in)
    await session.commit()
    await session.refresh(skill)
    return skill


@router.get("/teams/{team_id}/skills", response_model=List[SkillRead])
async def list_skills(
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await team_service.list_skills(session, tenant_id, team_id)


@router.patch("/skills/{skill_id}", response_model=SkillRead)
async def update_skill(
    tenant_id: uuid.UUID,
    skill_id: uuid.UUID,
    skill_in: SkillUpdate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    skill = await team_service.update_skill(session, tenant_id, skill_id, skill_in)
    await session.commit()
    await session.refresh(skill)
    return skill


@router.delete("/skills/{skill_id}", response_model=SuccessResponse)
async def delete_skill(
    tenant_id: uuid.UUID,
    skill_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    await team_service.delete_skill(session, tenant_id, skill_id)
    await session.commit()
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Skill incompatibility blacklist
# ---------------------------------------------------------------------------


@router.post(
    "/skill-incompatibilities", response_model=SkillIncompatibilityRead, status_code=201
)
async def add_skill_incompatibility(
    tenant_id: uuid.UUID,
    body: SkillIncompatibilityCreate,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    """Forbid one person from using both skills within the same event."""
    row = await team_service.add_incompatibility(
        session, tenant_id, body.skill_id_1, body.skill_id_2
    )
    await session.commit()
    return row


@router.get("/skill-incompatibilities", response_model=List[SkillIncompatibilityDetail])
async def list_skill_incompatibilities(
    tenant_id: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_member),
    session: AsyncSession = Depends(get_session),
):
    return await team_service.list_incompatibilities(session, tenant_id)


@router.delete("/skill-incompatibilities", response_model=SuccessResponse)
async def remove_skill_incompatibility(
    tenant_id: uuid.UUID,
    skill_id_1: uuid.UUID,
    skill_id_2: uuid.UUID,
    ctx: RequestContext = Depends(require_tenant_manager),
    session: AsyncSession = Depends(get_session),
):
    """Lift a blacklist entry. The pair may be given in either order."""
    await team_service.remove_incompatibility(session, tenant_id, skill_id_1, skill_id_2)
    await session.commit()
    return SuccessResponse()
