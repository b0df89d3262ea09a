"""
Event service: templates, template slots, events and event slots.

Handles:
- Template CRUD and its slot requirements
- Event creation with template snapshotting (slots copied, not linked)
- Event slot CRUD with team/skill ownership validation
"""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.errors import InvalidRequestError, NotFoundError
from app.models.event import Event, EventSlot
from app.models.event_template import EventTemplate, EventTemplateSlot
from app.models.team import Skill, Team
from app.services.teams import require_update_fields
from staffing_shared.schemas.common import EventStatus
from staffing_shared.schemas.events import (
    EventCreate,
    EventTemplateCreate,
    EventTemplateUpdate,
    EventUpdate,
    SlotCreate,
    SlotUpdate,
)

log = structlog.get_logger()


async def validate_slot_requirement(
    session: AsyncSession, tenant_id: uuid.UUID, team_id: uuid.UUID, skill_id: uuid.UUID
) -> None:
    """Check a (team, skill) requirement. Team first, then skill-in-team."""
    team = await session.get(Team, team_id)
    if not team or team.tenant_id != tenant_id:
        raise InvalidRequestError("Team not found in this tenant")

    result = await session.execute(
        select(Skill.id).where(
            Skill.id == skill_id,
            Skill.tenant_id == tenant_id,
            Skill.team_id == team_id,
        )
    )
    if result.first() is None:
        raise InvalidRequestError("Skill not found in this team")


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


async def get_template_or_404(
    session: AsyncSession, tenant_id: uuid.UUID, template_id: uuid.UUID
) -> EventTemplate:
    template = await session.get(EventTemplate, template_id)
    if not template or template.tenant_id != tenant_id:
        raise NotFoundError("Template not found")
    return template


async def create_template(
    session: AsyncSession, tenant_id: uuid.UUID, template_in: EventTemplateCreate
) -> EventTemplate:
    template = EventTemplate(
        tenant_id=tenant_id, name=template_in.name, description=template_in.description
    )
    session.add(template)
    await session.flush()
    log.info("event_template.created", tenant_id=str(tenant_id), template_id=str(template.id))
    return template


async def list_templates(session: AsyncSession, tenant_id: uuid.UUID) -> list[EventTemplate]:
    result = await session.execute(
        select(EventTemplate)
        .where(EventTemplate.tenant_id == tenant_id)
        .order_by(EventTemplate.name)
    )
    return list(result.scalars().all())


async def update_template(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    template_in: EventTemplateUpdate,
) -> EventTemplate:
    data = template_in.model_dump(exclude_unset=True)
    if data.get("name", "") is None:
        data.pop("name")
    require_update_fields(data)
    template = await get_template_or_404(session, tenant_id, template_id)
    for key, value in data.items():
        setattr(template, key, value)
    session.add(template)
    await session.flush()
    return template


async def delete_template(
    session: AsyncSession, tenant_id: uuid.UUID, template_id: uuid.UUID
) -> None:
    """Delete a template. Events created from it keep their own slots."""
    template = await get_template_or_404(session, tenant_id, template_id)
    await session.delete(template)
    await session.flush()
    log.info("event_template.deleted", tenant_id=str(tenant_id), template_id=str(template_id))


async def create_template_slot(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    slot_in: SlotCreate,
) -> EventTemplateSlot:
    await get_template_or_404(session, tenant_id, template_id)
    await validate_slot_requirement(session, tenant_id, slot_in.team_id, slot_in.skill_id)

    slot = EventTemplateSlot(
        tenant_id=tenant_id,
        template_id=template_id,
        team_id=slot_in.team_id,
        skill_id=slot_in.skill_id,
        quantity=slot_in.quantity,
    )
    session.add(slot)
    await session.flush()
    return slot


async def list_template_slots(
    session: AsyncSession, tenant_id: uuid.UUID, template_id: uuid.UUID
) -> list[EventTemplateSlot]:
    result = await session.execute(
        select(EventTemplateSlot).where(
            EventTemplateSlot.template_id == template_id,
            EventTemplateSlot.tenant_id == tenant_id,
        )
    )
    return list(result.scalars().all())


async def _get_template_slot_or_404(
    session: AsyncSession, tenant_id: uuid.UUID, template_id: uuid.UUID, slot_id: uuid.UUID
) -> EventTemplateSlot:
    slot = await session.get(EventTemplateSlot, slot_id)
    if not slot or slot.tenant_id != tenant_id or slot.template_id != template_id:
        raise NotFoundError("Template slot not found")
    return slot


async def update_template_slot(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    template_id: uuid.UUID,
    slot_id: uuid.UUID,
    slot_in: SlotUpdate,
) -> EventTemplateSlot:
    if slot_in.quantity is None:
        raise InvalidRequestError("No fields to update")
    slot = await _get_template_slot_or_404(session, tenant_id, template_id, slot_id)
    slot.quantity = slot_in.quantity
    session.add(slot)
    await session.flush()
    return slot


async def delete_template_slot(
    session: AsyncSession, tenant_id: uuid.UUID, template_id: uuid.UUID, slot_id: uuid.UUID
) -> None:
    slot = await _get_template_slot_or_404(session, tenant_id, template_id, slot_id)
    await session.delete(slot)
    await session.flush()


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


async def get_event_or_404(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID
) -> Event:
    event = await session.get(Event, event_id)
    if not event or event.tenant_id != tenant_id:
        raise NotFoundError("Event not found")
    return event


async def create_event(
    session: AsyncSession, tenant_id: uuid.UUID, event_in: EventCreate
) -> Event:
    """Create a draft event, snapshotting the template's slots if one is given.

    The event row and the copied slots are flushed in the caller's
    transaction; nothing is visible until the caller commits.
    """
    if event_in.template_id:
        template = await session.get(EventTemplate, event_in.template_id)
        if not template or template.tenant_id != tenant_id:
            raise InvalidRequestError("Template not found in this tenant")

    event = Event(
        tenant_id=tenant_id,
        template_id=event_in.template_id,
        name=event_in.name,
        date=event_in.date,
        status=EventStatus.DRAFT.value,
    )
    session.add(event)
    await session.flush()

    copied = 0
    if event_in.template_id:
        for template_slot in await list_template_slots(session, tenant_id, event_in.template_id):
            session.add(
                EventSlot(
                    tenant_id=tenant_id,
                    event_id=event.id,
                    team_id=template_slot.team_id,
                    skill_id=template_slot.skill_id,
                    quantity=template_slot.quantity,
                )
            )
            copied += 1
        await session.flush()

    log.info(
        "event.created",
        tenant_id=str(tenant_id),
        event_id=str(event.id),
        template_id=str(event_in.template_id) if event_in.template_id else None,
        slots_copied=copied,
    )
    return event


async def list_events(session: AsyncSession, tenant_id: uuid.UUID) -> list[Event]:
    result = await session.execute(
        select(Event).where(Event.tenant_id == tenant_id).order_by(Event.date)
    )
    return list(result.scalars().all())


async def update_event(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID, event_in: EventUpdate
) -> Event:
    data = require_update_fields(event_in.model_dump(exclude_unset=True, exclude_none=True))
    event = await get_event_or_404(session, tenant_id, event_id)
    if "status" in data:
        data["status"] = EventStatus(data["status"]).value
    for key, value in data.items():
        setattr(event, key, value)
    session.add(event)
    await session.flush()
    log.info("event.updated", tenant_id=str(tenant_id), event_id=str(event_id), fields=sorted(data))
    return event


async def delete_event(session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID) -> None:
    event = await get_event_or_404(session, tenant_id, event_id)
    await session.delete(event)
    await session.flush()
    log.info("event.deleted", tenant_id=str(tenant_id), event_id=str(event_id))


# ---------------------------------------------------------------------------
# Event slots
# ---------------------------------------------------------------------------


async def get_event_slot_or_404(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID, slot_id: uuid.UUID
) -> EventSlot:
    slot = await session.get(EventSlot, slot_id)
    if not slot or slot.tenant_id != tenant_id or slot.event_id != event_id:
        raise NotFoundError("Event slot not found")
    return slot


async def create_slot(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID, slot_in: SlotCreate
) -> EventSlot:
    await get_event_or_404(session, tenant_id, event_id)
    await validate_slot_requirement(session, tenant_id, slot_in.team_id, slot_in.skill_id)

    slot = EventSlot(
        tenant_id=tenant_id,
        event_id=event_id,
        team_id=slot_in.team_id,
        skill_id=slot_in.skill_id,
        quantity=slot_in.quantity,
    )
    session.add(slot)
    await session.flush()
    log.info("event_slot.created", tenant_id=str(tenant_id), event_id=str(event_id), slot_id=str(slot.id))
    return slot


async def list_slots(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID
) -> list[EventSlot]:
    result = await session.execute(
        select(EventSlot).where(EventSlot.event_id == event_id, EventSlot.tenant_id == tenant_id)
    )
    return list(result.scalars().all())


async def update_slot(
    session: AsyncSession,
    tenant_id: uuid.UUID,
    event_id: uuid.UUID,
    slot_id: uuid.UUID,
    slot_in: SlotUpdate,
) -> EventSlot:
    if slot_in.quantity is None:
        raise InvalidRequestError("No fields to update")
    slot = await get_event_slot_or_404(session, tenant_id, event_id, slot_id)
    slot.quantity = slot_in.quantity
    session.add(slot)
    await session.flush()
    return slot


async def delete_slot(
    session: AsyncSession, tenant_id: uuid.UUID, event_id: uuid.UUID, slot_id: uuid.UUID
) -> None:
    slot = await get_event_slot_or_404(session, tenant_id, event_id, slot_id)
    await session.delete(slot)
    await session.flush()
    log.info("event_slot.deleted", tenant_id=str(tenant_id), slot_id=str(slot_id))
