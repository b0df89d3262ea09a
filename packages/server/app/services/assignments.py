"""
Assignment engine.

Decides whether a person may fill a slot of an event. The checks run in a
fixed order and the first failure wins:

1. the slot exists in this tenant and belongs to the event
2. the person is an active user of the tenant
3. the person is a member of the slot's team
4. that membership has been granted the slot's skill
5. every other assignment of the person in this event is on the same team
6. no skill already used by the person in this event is blacklisted
   against the slot's skill
7. (optional) the slot still has room
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.auth import is_active_user
from app.core.config import get_settings
from app.core.errors import InternalError, InvalidRequestError, NotFoundError
from app.models.assignments import EventAssignment
from app.models.event import EventSlot
from app.services.members import get_member_skill, get_membership
from app.services.teams import find_incompatibility

log = structlog.get_logger()


def _reject(reason: str, error: Exception, **fields) -> Exception:
    log.info("assignment.rejected", reason=reason, **fields)
    return error


async def _existing_assignment_slots(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID, user_id: uuid.UUID
) -> list[tuple[uuid.UUID, uuid.UUID]]:
    """(team_id, skill_id) of each slot the user already fills in the event."""
    result = await session.execute(
        select(EventSlot.team_id, EventSlot.skill_id)
        .join(EventAssignment, EventAssignment.slot_id == EventSlot.id)
        .where(
            EventAssignment.tenant_id == tenant_id,
            EventAssignment.event_id == event_id,
            EventAssignment.user_id == user_id,
        )
        .order_by(EventAssignment.created_at)
    )
    return [(team_id, skill_id) for team_id, skill_id in result.all()]


async def count_slot_assignments(
    session: AsyncSession, tenant_id: uuid.UUID, slot_id: uuid.UUID
) -> int:
    result = await session.execute(
        select(func.count())
        .select_from(EventAssignment)
        .where(EventAssignment.slot_id == slot_id, EventAssignment.tenant_id == tenant_id)
    )
    return result.scalar_one()


async def create_assignment(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    slot_id: uuid.UUID,
    user_id: uuid.UUID,
) -> EventAssignment:
    fields = {
        "tenant_id": str(tenant_id),
        "event_id": str(event_id),
        "slot_id": str(slot_id),
        "user_id": str(user_id),
    }

    slot = await session.get(EventSlot, slot_id)
    if not slot or slot.tenant_id != tenant_id or slot.event_id != event_id:
        raise _reject("slot_not_found", NotFoundError("Event slot not found"), **fields)

    if not await is_active_user(session, tenant_id, user_id):
        raise _reject(
            "inactive_user", NotFoundError("Active user not found in this tenant"), **fields
        )

    member = await get_membership(session, tenant_id, slot.team_id, user_id)
    if not member:
        raise _reject(
            "not_team_member",
            InvalidRequestError("User is not a member of the required team"),
            **fields,
        )

    if not await get_member_skill(session, tenant_id, member.id, slot.skill_id):
        raise _reject(
            "missing_skill",
            InvalidRequestError("User does not have the required skill"),
            **fields,
        )

    existing = await _existing_assignment_slots(session, tenant_id, event_id, user_id)
    if existing:
        first_team_id, _ = existing[0]
        if first_team_id != slot.team_id:
            raise _reject(
                "team_conflict",
                InvalidRequestError("User can only be assigned to one team per event"),
                **fields,
            )

        for _, existing_skill_id in existing:
            if await find_incompatibility(session, tenant_id, existing_skill_id, slot.skill_id):
                raise _reject(
                    "incompatible_skills",
                    InvalidRequestError(
                        "These skills cannot be used simultaneously by the same person"
                    ),
                    existing_skill_id=str(existing_skill_id),
                    **fields,
                )

    if get_settings().enforce_slot_quantity:
        if await count_slot_assignments(session, tenant_id, slot.id) >= slot.quantity:
            raise _reject("slot_full", InvalidRequestError("Event slot is already full"), **fields)

    assignment = EventAssignment(
        tenant_id=tenant_id, event_id=event_id, slot_id=slot.id, user_id=user_id
    )
    session.add(assignment)
    try:
        await session.flush()
    except SQLAlchemyError as exc:
        log.error("assignment.insert_failed", error=str(exc), **fields)
        raise InternalError("Failed to create assignment") from exc

    log.info("assignment.created", assignment_id=str(assignment.id), **fields)
    return assignment


async def commit_assignment(session: AsyncSession, assignment: EventAssignment) -> None:
    """Commit a freshly created assignment; storage errors surface as InternalError."""
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        log.error(
            "assignment.commit_failed",
            error=str(exc),
            tenant_id=str(assignment.tenant_id),
            event_id=str(assignment.event_id),
            user_id=str(assignment.user_id),
        )
        await session.rollback()
        raise InternalError("Failed to create assignment") from exc


async def list_assignments(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID
) -> list[EventAssignment]:
    result = await session.execute(
        select(EventAssignment)
        .where(EventAssignment.event_id == event_id, EventAssignment.tenant_id == tenant_id)
        .order_by(EventAssignment.created_at)
    )
    return list(result.scalars().all())


async def delete_assignment(
    session: AsyncSession, tenant_id: uuid.UUID, assignment_id: uuid.UUID
) -> None:
    assignment = await session.get(EventAssignment, assignment_id)
    if not assignment or assignment.tenant_id != tenant_id:
        raise NotFoundError("Assignment not found")
    await session.delete(assignment)
    await session.flush()
    log.info("assignment.deleted", tenant_id=str(tenant_id), assignment_id=str(assignment_id))
