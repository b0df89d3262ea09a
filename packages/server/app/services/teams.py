"""
Team catalog service: teams, skills and the skill-incompatibility blacklist.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased
from sqlmodel import select

from app.core.errors import ConflictError, InvalidRequestError, NotFoundError
from app.models.skill_incompatibility import SkillIncompatibility
from app.models.team import Skill, Team
from staffing_shared.schemas.teams import (
    SkillCreate,
    SkillIncompatibilityDetail,
    SkillUpdate,
    TeamCreate,
    TeamUpdate,
    canonical_pair,
)

log = structlog.get_logger()


def require_update_fields(data: dict) -> dict:
    """Reject partial updates that set nothing."""
    if not data:
        raise InvalidRequestError("No fields to update")
    return data


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------


async def get_team_or_404(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID
) -> Team:
    team = await session.get(Team, team_id)
    if not team or team.tenant_id != tenant_id:
        raise NotFoundError("Team not found")
    return team


async def create_team(
    session: AsyncSession, tenant_id: uuid.UUID, team_in: TeamCreate
) -> Team:
    team = Team(tenant_id=tenant_id, name=team_in.name, description=team_in.description)
    session.add(team)
    await session.flush()
    log.info("team.created", tenant_id=str(tenant_id), team_id=str(team.id))
    return team


async def list_teams(session: AsyncSession, tenant_id: uuid.UUID) -> list[Team]:
    result = await session.execute(
        select(Team).where(Team.tenant_id == tenant_id).order_by(Team.name)
    )
    return list(result.scalars().all())


async def update_team(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID, team_in: TeamUpdate
) -> Team:
    data = team_in.model_dump(exclude_unset=True)
    if data.get("name", "") is None:
        data.pop("name")
    require_update_fields(data)
    team = await get_team_or_404(session, tenant_id, team_id)
    for key, value in data.items():
        setattr(team, key, value)
    session.add(team)
    await session.flush()
    log.info("team.updated", tenant_id=str(tenant_id), team_id=str(team_id), fields=sorted(data))
    return team


async def delete_team(session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID) -> None:
    team = await get_team_or_404(session, tenant_id, team_id)
    await session.delete(team)
    await session.flush()
    log.info("team.deleted", tenant_id=str(tenant_id), team_id=str(team_id))


# ---------------------------------------------------------------------------
# Skills
# ---------------------------------------------------------------------------


async def get_skill_or_404(
    session: AsyncSession, tenant_id: uuid.UUID, skill_id: uuid.UUID
) -> Skill:
    skill = await session.get(Skill, skill_id)
    if not skill or skill.tenant_id != tenant_id:
        raise NotFoundError("Skill not found")
    return skill


async def create_skill(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID, skill_in: SkillCreate
) -> Skill:
    await get_team_or_404(session, tenant_id, team_id)
    skill = Skill(tenant_id=tenant_id, team_id=team_id, name=skill_in.name)
    session.add(skill)
    await session.flush()
    log.info("skill.created", tenant_id=str(tenant_id), team_id=str(team_id), skill_id=str(skill.id))
    return skill


async def list_skills(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID
) -> list[Skill]:
    result = await session.execute(
        select(Skill)
        .where(Skill.team_id == team_id, Skill.tenant_id == tenant_id)
        .order_by(Skill.name)
    )
    return list(result.scalars().all())


async def update_skill(
    session: AsyncSession, tenant_id: uuid.UUID, skill_id: uuid.UUID, skill_in: SkillUpdate
) -> Skill:
    data = require_update_fields(skill_in.model_dump(exclude_unset=True, exclude_none=True))
    skill = await get_skill_or_404(session, tenant_id, skill_id)
    skill.name = data["name"]
    session.add(skill)
    await session.flush()
    log.info("skill.updated", tenant_id=str(tenant_id), skill_id=str(skill_id))
    return skill


async def delete_skill(session: AsyncSession, tenant_id: uuid.UUID, skill_id: uuid.UUID) -> None:
    skill = await get_skill_or_404(session, tenant_id, skill_id)
    await session.delete(skill)
    await session.flush()
    log.info("skill.deleted", tenant_id=str(tenant_id), skill_id=str(skill_id))


# ---------------------------------------------------------------------------
# Skill incompatibility blacklist
# ---------------------------------------------------------------------------


async def find_incompatibility(
    session: AsyncSession, tenant_id: uuid.UUID, skill_a: uuid.UUID, skill_b: uuid.UUID
) -> SkillIncompatibility | None:
    id1, id2 = canonical_pair(skill_a, skill_b)
    result = await session.execute(
        select(SkillIncompatibility).where(
            SkillIncompatibility.tenant_id == tenant_id,
            SkillIncompatibility.skill_id_1 == id1,
            SkillIncompatibility.skill_id_2 == id2,
        )
    )
    return result.scalar_one_or_none()


async def add_incompatibility(
    session: AsyncSession, tenant_id: uuid.UUID, skill_id_1: uuid.UUID, skill_id_2: uuid.UUID
) -> SkillIncompatibility:
    """Blacklist a skill pair. A second add of the same pair is a conflict."""
    result = await session.execute(
        select(Skill.id).where(
            Skill.tenant_id == tenant_id,
            Skill.id.in_([skill_id_1, skill_id_2]),
        )
    )
    if len(result.all()) != 2:
        raise InvalidRequestError("One or both skills do not belong to this tenant")

    if await find_incompatibility(session, tenant_id, skill_id_1, skill_id_2):
        raise ConflictError("Skill incompatibility already exists")

    id1, id2 = canonical_pair(skill_id_1, skill_id_2)
    row = SkillIncompatibility(tenant_id=tenant_id, skill_id_1=id1, skill_id_2=id2)
    session.add(row)
    try:
        await session.flush()
    except IntegrityError as exc:
        raise ConflictError("Skill incompatibility already exists") from exc
    log.info("skill_incompatibility.added", tenant_id=str(tenant_id), skill_id_1=str(id1), skill_id_2=str(id2))
    return row


async def remove_incompatibility(
    session: AsyncSession, tenant_id: uuid.UUID, skill_id_1: uuid.UUID, skill_id_2: uuid.UUID
) -> None:
    row = await find_incompatibility(session, tenant_id, skill_id_1, skill_id_2)
    if not row:
        raise NotFoundError("Skill incompatibility not found")
    await session.delete(row)
    await session.flush()
    log.info(
        "skill_incompatibility.removed",
        tenant_id=str(tenant_id),
        skill_id_1=str(row.skill_id_1),
        skill_id_2=str(row.skill_id_2),
    )


async def list_incompatibilities(
    session: AsyncSession, tenant_id: uuid.UUID
) -> list[SkillIncompatibilityDetail]:
    skill_1 = aliased(Skill)
    skill_2 = aliased(Skill)
    result = await session.execute(
        select(
            SkillIncompatibility.skill_id_1,
            SkillIncompatibility.skill_id_2,
            skill_1.name,
            skill_2.name,
        )
        .join(skill_1, skill_1.id == SkillIncompatibility.skill_id_1)
        .join(skill_2, skill_2.id == SkillIncompatibility.skill_id_2)
        .where(SkillIncompatibility.tenant_id == tenant_id)
    )
    return [
        SkillIncompatibilityDetail(
            skill_id_1=id1, skill_id_2=id2, skill_1_name=name1, skill_2_name=name2
        )
        for id1, id2, name1, name2 in result.all()
    ]
