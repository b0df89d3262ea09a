"""
Membership service: which active users belong to which teams, and which
skills each membership has been granted.
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.auth import is_active_user
from app.core.errors import ConflictError, InvalidRequestError, NotFoundError
from app.models.person import Person
from app.models.team import Skill
from app.models.team_member import MemberSkill, TeamMember
from app.services.teams import get_team_or_404, require_update_fields
from staffing_shared.schemas.teams import (
    MemberSkillAssign,
    MemberSkillDetail,
    MemberSkillUpdate,
    TeamMemberAdd,
    TeamMemberDetail,
    TeamMemberUpdate,
)

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


async def get_membership(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID, user_id: uuid.UUID
) -> TeamMember | None:
    result = await session.execute(
        select(TeamMember).where(
            TeamMember.team_id == team_id,
            TeamMember.user_id == user_id,
            TeamMember.tenant_id == tenant_id,
        )
    )
    return result.scalar_one_or_none()


async def add_member(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID, member_in: TeamMemberAdd
) -> TeamMember:
    await get_team_or_404(session, tenant_id, team_id)

    if not await is_active_user(session, tenant_id, member_in.user_id):
        raise NotFoundError("Active user not found or does not belong to this tenant")

    if await get_membership(session, tenant_id, team_id, member_in.user_id):
        raise ConflictError("User is already a member of this team")

    member = TeamMember(
        tenant_id=tenant_id,
        team_id=team_id,
        user_id=member_in.user_id,
        role=member_in.role,
    )
    session.add(member)
    try:
        await session.flush()
    except IntegrityError as exc:
        raise ConflictError("User is already a member of this team") from exc
    log.info(
        "team_member.added",
        tenant_id=str(tenant_id),
        team_id=str(team_id),
        user_id=str(member_in.user_id),
    )
    return member


async def list_members(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID
) -> list[TeamMemberDetail]:
    result = await session.execute(
        select(TeamMember, Person.email, Person.display_name)
        .join(Person, Person.id == TeamMember.user_id)
        .where(TeamMember.team_id == team_id, TeamMember.tenant_id == tenant_id)
    )
    return [
        TeamMemberDetail(
            id=member.id,
            tenant_id=member.tenant_id,
            team_id=member.team_id,
            user_id=member.user_id,
            role=member.role,
            created_at=member.created_at,
            email=email,
            display_name=display_name,
        )
        for member, email, display_name in result.all()
    ]


async def update_member(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    team_id: uuid.UUID,
    user_id: uuid.UUID,
    member_in: TeamMemberUpdate,
) -> TeamMember:
    data = require_update_fields(member_in.model_dump(exclude_unset=True))
    member = await get_membership(session, tenant_id, team_id, user_id)
    if not member:
        raise NotFoundError("Team member not found")
    member.role = data["role"]
    session.add(member)
    await session.flush()
    log.info("team_member.updated", tenant_id=str(tenant_id), team_id=str(team_id), user_id=str(user_id))
    return member


async def remove_member(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID, user_id: uuid.UUID
) -> None:
    member = await get_membership(session, tenant_id, team_id, user_id)
    if not member:
        raise NotFoundError("Team member not found")
    await session.delete(member)
    await session.flush()
    log.info("team_member.removed", tenant_id=str(tenant_id), team_id=str(team_id), user_id=str(user_id))


# ---------------------------------------------------------------------------
# Skill grants
# ---------------------------------------------------------------------------


async def get_member_skill(
    session: AsyncSession, tenant_id: uuid.UUID, team_member_id: uuid.UUID, skill_id: uuid.UUID
) -> MemberSkill | None:
    result = await session.execute(
        select(MemberSkill).where(
            MemberSkill.team_member_id == team_member_id,
            MemberSkill.skill_id == skill_id,
            MemberSkill.tenant_id == tenant_id,
        )
    )
    return result.scalar_one_or_none()


async def assign_member_skill(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    team_member_id: uuid.UUID,
    grant_in: MemberSkillAssign,
) -> MemberSkill:
    """Grant a skill to a membership.

    The skill must be owned by the membership's team; a grant is scoped to
    one team context.
    """
    skill = await session.get(Skill, grant_in.skill_id)
    if not skill or skill.tenant_id != tenant_id:
        raise NotFoundError("Skill not found or does not belong to this tenant")

    member = await session.get(TeamMember, team_member_id)
    if not member or member.tenant_id != tenant_id:
        raise NotFoundError("Team member not found or does not belong to this tenant")

    if skill.team_id != member.team_id:
        raise InvalidRequestError("Skill does not belong to the member's team")

    if await get_member_skill(session, tenant_id, team_member_id, skill.id):
        raise ConflictError("Skill already assigned to this member")

    grant = MemberSkill(
        tenant_id=tenant_id,
        team_member_id=team_member_id,
        skill_id=skill.id,
        proficiency_level=grant_in.proficiency_level,
    )
    session.add(grant)
    try:
        await session.flush()
    except IntegrityError as exc:
        raise ConflictError("Skill already assigned to this member") from exc
    log.info(
        "member_skill.assigned",
        tenant_id=str(tenant_id),
        team_member_id=str(team_member_id),
        skill_id=str(skill.id),
    )
    return grant


async def list_member_skills(
    session: AsyncSession, tenant_id: uuid.UUID, team_member_id: uuid.UUID
) -> list[MemberSkillDetail]:
    result = await session.execute(
        select(MemberSkill, Skill.name)
        .join(Skill, Skill.id == MemberSkill.skill_id)
        .where(
            MemberSkill.team_member_id == team_member_id,
            MemberSkill.tenant_id == tenant_id,
        )
    )
    return [
        MemberSkillDetail(
            id=grant.id,
            tenant_id=grant.tenant_id,
            team_member_id=grant.team_member_id,
            skill_id=grant.skill_id,
            proficiency_level=grant.proficiency_level,
            created_at=grant.created_at,
            skill_name=name,
        )
        for grant, name in result.all()
    ]


async def update_member_skill(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    team_member_id: uuid.UUID,
    skill_id: uuid.UUID,
    grant_in: MemberSkillUpdate,
) -> MemberSkill:
    data = require_update_fields(grant_in.model_dump(exclude_unset=True))
    grant = await get_member_skill(session, tenant_id, team_member_id, skill_id)
    if not grant:
        raise NotFoundError("Member skill not found")
    grant.proficiency_level = data["proficiency_level"]
    session.add(grant)
    await session.flush()
    return grant


async def remove_member_skill(
    session: AsyncSession, tenant_id: uuid.UUID, team_member_id: uuid.UUID, skill_id: uuid.UUID
) -> None:
    grant = await get_member_skill(session, tenant_id, team_member_id, skill_id)
    if not grant:
        raise NotFoundError("Member skill not found")
    await session.delete(grant)
    await session.flush()
    log.info(
        "member_skill.removed",
        tenant_id=str(tenant_id),
        team_member_id=str(team_member_id),
        skill_id=str(skill_id),
    )
