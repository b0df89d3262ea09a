"""
Tests for templates, events and slots.

Covers:
- Template slot requirements (team/skill ownership checks)
- Event creation snapshotting template slots
- Template edits and deletion leaving existing events untouched
- Event slot CRUD and event updates
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from app.core.errors import InvalidRequestError, NotFoundError
from app.models.event import Event
from app.services import events as event_service
from staffing_shared.schemas.common import EventStatus
from staffing_shared.schemas.events import (
    EventCreate,
    EventTemplateCreate,
    EventTemplateUpdate,
    EventUpdate,
    SlotCreate,
    SlotUpdate,
)

GALA_DATE = datetime(2026, 12, 31, 20, 0, tzinfo=timezone.utc)


async def make_template(session, seed):
    template = await event_service.create_template(
        session, seed.tenant.id, EventTemplateCreate(name="Concert")
    )
    await event_service.create_template_slot(
        session,
        seed.tenant.id,
        template.id,
        SlotCreate(team_id=seed.audio.id, skill_id=seed.mixing.id, quantity=2),
    )
    await event_service.create_template_slot(
        session,
        seed.tenant.id,
        template.id,
        SlotCreate(team_id=seed.lighting.id, skill_id=seed.rigging.id),
    )
    return template


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class TestTemplateService:
    async def test_slot_requires_tenant_team(self, session, seed):
        template = await event_service.create_template(
            session, seed.tenant.id, EventTemplateCreate(name="Fair")
        )
        with pytest.raises(InvalidRequestError, match="Team not found in this tenant"):
            await event_service.create_template_slot(
                session,
                seed.tenant.id,
                template.id,
                SlotCreate(team_id=seed.foreign_team.id, skill_id=seed.foreign_skill.id),
            )

    async def test_slot_skill_must_belong_to_team(self, session, seed):
        template = await event_service.create_template(
            session, seed.tenant.id, EventTemplateCreate(name="Fair")
        )
        with pytest.raises(InvalidRequestError, match="Skill not found in this team"):
            await event_service.create_template_slot(
                session,
                seed.tenant.id,
                template.id,
                SlotCreate(team_id=seed.audio.id, skill_id=seed.rigging.id),
            )

    async def test_unknown_template(self, session, seed):
        with pytest.raises(NotFoundError, match="Template not found"):
            await event_service.create_template_slot(
                session,
                seed.tenant.id,
                uuid.uuid4(),
                SlotCreate(team_id=seed.audio.id, skill_id=seed.mixing.id),
            )

    async def test_update_template_requires_fields(self, session, seed):
        template = await make_template(session, seed)
        with pytest.raises(InvalidRequestError, match="No fields to update"):
            await event_service.update_template(
                session, seed.tenant.id, template.id, EventTemplateUpdate()
            )

    async def test_template_slot_quantity_update(self, session, seed):
        template = await make_template(session, seed)
        slots = await event_service.list_template_slots(session, seed.tenant.id, template.id)
        slot = await event_service.update_template_slot(
            session, seed.tenant.id, template.id, slots[0].id, SlotUpdate(quantity=5)
        )
        assert slot.quantity == 5

    async def test_template_slot_of_another_template_not_found(self, session, seed):
        template = await make_template(session, seed)
        other = await event_service.create_template(
            session, seed.tenant.id, EventTemplateCreate(name="Fair")
        )
        slots = await event_service.list_template_slots(session, seed.tenant.id, template.id)

        with pytest.raises(NotFoundError, match="Template slot not found"):
            await event_service.update_template_slot(
                session, seed.tenant.id, other.id, slots[0].id, SlotUpdate(quantity=5)
            )
        with pytest.raises(NotFoundError, match="Template slot not found"):
            await event_service.delete_template_slot(session, seed.tenant.id, other.id, slots[0].id)

    async def test_template_slot_missing(self, session, seed):
        with pytest.raises(NotFoundError, match="Template slot not found"):
            await event_service.delete_template_slot(
                session, seed.tenant.id, uuid.uuid4(), uuid.uuid4()
            )


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class TestEventService:
    async def test_create_without_template(self, session, seed):
        event = await event_service.create_event(
            session, seed.tenant.id, EventCreate(name="Meetup", date=GALA_DATE)
        )
        assert event.status == EventStatus.DRAFT.value
        assert event.template_id is None
        assert await event_service.list_slots(session, seed.tenant.id, event.id) == []

    async def test_create_copies_template_slots(self, session, seed):
        template = await make_template(session, seed)
        event = await event_service.create_event(
            session, seed.tenant.id, EventCreate(name="NYE", date=GALA_DATE, template_id=template.id)
        )

        slots = await event_service.list_slots(session, seed.tenant.id, event.id)
        assert sorted((s.team_id, s.skill_id, s.quantity) for s in slots) == sorted(
            [(seed.audio.id, seed.mixing.id, 2), (seed.lighting.id, seed.rigging.id, 1)]
        )
        assert event.template_id == template.id

    async def test_template_from_other_tenant(self, session, seed):
        foreign = await event_service.create_template(
            session, seed.other_tenant.id, EventTemplateCreate(name="Theirs")
        )
        with pytest.raises(InvalidRequestError, match="Template not found in this tenant"):
            await event_service.create_event(
                session, seed.tenant.id, EventCreate(name="NYE", date=GALA_DATE, template_id=foreign.id)
            )

    async def test_template_edits_do_not_propagate(self, session, seed):
        template = await make_template(session, seed)
        event = await event_service.create_event(
            session, seed.tenant.id, EventCreate(name="NYE", date=GALA_DATE, template_id=template.id)
        )

        await event_service.create_template_slot(
            session,
            seed.tenant.id,
            template.id,
            SlotCreate(team_id=seed.audio.id, skill_id=seed.mic.id),
        )
        for slot in await event_service.list_template_slots(session, seed.tenant.id, template.id):
            await event_service.update_template_slot(
                session, seed.tenant.id, template.id, slot.id, SlotUpdate(quantity=9)
            )

        slots = await event_service.list_slots(session, seed.tenant.id, event.id)
        assert len(slots) == 2
        assert sorted(s.quantity for s in slots) == [1, 2]

    async def test_template_delete_keeps_event(self, session, seed):
        template = await make_template(session, seed)
        event = await event_service.create_event(
            session, seed.tenant.id, EventCreate(name="NYE", date=GALA_DATE, template_id=template.id)
        )
        await session.commit()

        await event_service.delete_template(session, seed.tenant.id, template.id)
        await session.commit()

        await session.refresh(event)
        assert event.template_id is None
        assert len(await event_service.list_slots(session, seed.tenant.id, event.id)) == 2

    async def test_update_event(self, session, seed):
        event = await event_service.update_event(
            session,
            seed.tenant.id,
            seed.event.id,
            EventUpdate(name="Winter Gala", status=EventStatus.PUBLISHED),
        )
        assert event.name == "Winter Gala"
        assert event.status == "published"

    async def test_update_event_requires_fields(self, session, seed):
        with pytest.raises(InvalidRequestError, match="No fields to update"):
            await event_service.update_event(session, seed.tenant.id, seed.event.id, EventUpdate())

    async def test_update_unknown_event(self, session, seed):
        with pytest.raises(NotFoundError, match="Event not found"):
            await event_service.update_event(
                session, seed.tenant.id, uuid.uuid4(), EventUpdate(name="X")
            )

    async def test_delete_event_cascades(self, session, seed):
        await event_service.delete_event(session, seed.tenant.id, seed.other_event.id)
        await session.commit()

        assert await session.get(Event, seed.other_event.id) is None
        assert await event_service.list_slots(session, seed.tenant.id, seed.other_event.id) == []


class TestEventSlotService:
    async def test_create_slot_unknown_event(self, session, seed):
        with pytest.raises(NotFoundError, match="Event not found"):
            await event_service.create_slot(
                session,
                seed.tenant.id,
                uuid.uuid4(),
                SlotCreate(team_id=seed.audio.id, skill_id=seed.mixing.id),
            )

    async def test_create_slot_foreign_team(self, session, seed):
        with pytest.raises(InvalidRequestError, match="Team not found in this tenant"):
            await event_service.create_slot(
                session,
                seed.tenant.id,
                seed.event.id,
                SlotCreate(team_id=seed.foreign_team.id, skill_id=seed.mixing.id),
            )

    async def test_create_slot_skill_of_other_team(self, session, seed):
        with pytest.raises(InvalidRequestError, match="Skill not found in this team"):
            await event_service.create_slot(
                session,
                seed.tenant.id,
                seed.event.id,
                SlotCreate(team_id=seed.lighting.id, skill_id=seed.mic.id),
            )

    async def test_update_slot_quantity(self, session, seed):
        slot = await event_service.update_slot(
            session, seed.tenant.id, seed.event.id, seed.slot_mic.id, SlotUpdate(quantity=4)
        )
        assert slot.quantity == 4

    async def test_update_slot_requires_quantity(self, session, seed):
        with pytest.raises(InvalidRequestError, match="No fields to update"):
            await event_service.update_slot(
                session, seed.tenant.id, seed.event.id, seed.slot_mic.id, SlotUpdate()
            )

    async def test_update_missing_slot(self, session, seed):
        with pytest.raises(NotFoundError, match="Event slot not found"):
            await event_service.update_slot(
                session, seed.tenant.id, seed.event.id, uuid.uuid4(), SlotUpdate(quantity=2)
            )

    async def test_slot_of_another_event_not_found(self, session, seed):
        with pytest.raises(NotFoundError, match="Event slot not found"):
            await event_service.update_slot(
                session, seed.tenant.id, seed.event.id, seed.other_slot.id, SlotUpdate(quantity=7)
            )
        with pytest.raises(NotFoundError, match="Event slot not found"):
            await event_service.delete_slot(session, seed.tenant.id, seed.event.id, seed.other_slot.id)

        await session.refresh(seed.other_slot)
        assert seed.other_slot.quantity == 1


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


class TestEventEndpoints:
    async def test_template_to_event_flow(self, client, seed, tenant_url, owner_headers):
        resp = await client.post(
            f"{tenant_url}/event-templates", json={"name": "Festival"}, headers=owner_headers
        )
        assert resp.status_code == 201
        template_id = resp.json()["id"]

        resp = await client.post(
            f"{tenant_url}/event-templates/{template_id}/slots",
            json={"team_id": str(seed.audio.id), "skill_id": str(seed.mixing.id), "quantity": 3},
            headers=owner_headers,
        )
        assert resp.status_code == 201

        resp = await client.post(
            f"{tenant_url}/events",
            json={"name": "Festival 2026", "date": "2026-08-01T12:00:00Z", "template_id": template_id},
            headers=owner_headers,
        )
        assert resp.status_code == 201
        event = resp.json()
        assert event["status"] == "draft"
        assert event["template_id"] == template_id

        resp = await client.get(f"{tenant_url}/events/{event['id']}/slots", headers=owner_headers)
        assert [(s["skill_id"], s["quantity"]) for s in resp.json()] == [(str(seed.mixing.id), 3)]

        resp = await client.delete(f"{tenant_url}/event-templates/{template_id}", headers=owner_headers)
        assert resp.json() == {"success": True}

        resp = await client.get(f"{tenant_url}/events/{event['id']}", headers=owner_headers)
        assert resp.json()["template_id"] is None

    async def test_slot_validation_message(self, client, seed, tenant_url, owner_headers):
        resp = await client.post(
            f"{tenant_url}/events/{seed.event.id}/slots",
            json={"team_id": str(seed.audio.id), "skill_id": str(seed.rigging.id)},
            headers=owner_headers,
        )
        assert resp.status_code == 400
        assert resp.json() == {
            "error": {"code": "BAD_REQUEST", "message": "Skill not found in this team", "status": 400}
        }

    async def test_slot_addressed_through_wrong_event(self, client, seed, tenant_url, owner_headers):
        url = f"{tenant_url}/events/{seed.event.id}/slots/{seed.other_slot.id}"

        resp = await client.patch(url, json={"quantity": 7}, headers=owner_headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Event slot not found"

        resp = await client.delete(url, headers=owner_headers)
        assert resp.status_code == 404

        resp = await client.get(f"{tenant_url}/events/{seed.other_event.id}/slots", headers=owner_headers)
        assert [s["quantity"] for s in resp.json()] == [1]

    async def test_template_slot_addressed_through_wrong_template(
        self, client, seed, tenant_url, owner_headers
    ):
        ids = []
        for name in ("Concert", "Fair"):
            resp = await client.post(
                f"{tenant_url}/event-templates", json={"name": name}, headers=owner_headers
            )
            ids.append(resp.json()["id"])
        concert_id, fair_id = ids

        resp = await client.post(
            f"{tenant_url}/event-templates/{concert_id}/slots",
            json={"team_id": str(seed.audio.id), "skill_id": str(seed.mixing.id)},
            headers=owner_headers,
        )
        slot_id = resp.json()["id"]
        url = f"{tenant_url}/event-templates/{fair_id}/slots/{slot_id}"

        resp = await client.patch(url, json={"quantity": 4}, headers=owner_headers)
        assert resp.status_code == 404
        assert resp.json()["error"]["message"] == "Template slot not found"

        resp = await client.delete(url, headers=owner_headers)
        assert resp.status_code == 404

        resp = await client.get(
            f"{tenant_url}/event-templates/{concert_id}/slots", headers=owner_headers
        )
        assert [s["quantity"] for s in resp.json()] == [1]

    async def test_zero_quantity_rejected(self, client, seed, tenant_url, owner_headers):
        resp = await client.post(
            f"{tenant_url}/events/{seed.event.id}/slots",
            json={"team_id": str(seed.audio.id), "skill_id": str(seed.mixing.id), "quantity": 0},
            headers=owner_headers,
        )
        assert resp.status_code == 422

    async def test_publish_event(self, client, seed, tenant_url, owner_headers):
        resp = await client.patch(
            f"{tenant_url}/events/{seed.event.id}", json={"status": "published"}, headers=owner_headers
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "published"

    async def test_unknown_status_rejected(self, client, seed, tenant_url, owner_headers):
        resp = await client.patch(
            f"{tenant_url}/events/{seed.event.id}", json={"status": "archived"}, headers=owner_headers
        )
        assert resp.status_code == 422

    async def test_events_hidden_from_other_tenant(self, client, seed, outsider_headers):
        resp = await client.get(
            f"/api/v1/tenants/{seed.other_tenant.id}/events/{seed.event.id}", headers=outsider_headers
        )
        assert resp.status_code == 404
