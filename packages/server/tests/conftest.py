"""
Shared fixtures: in-memory SQLite database, seeded tenant data, an HTTP
client wired to the test database and bearer tokens for each kind of caller.
"""

from __future__ import annotations

import os

# Settings are read once at import time; point them at SQLite before any app import.
os.environ.setdefault("STAFFING_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STAFFING_LOG_FORMAT", "text")
os.environ.setdefault("STAFFING_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from app.core.auth import create_access_token
from app.core.database import build_engine, get_session
from app.main import app
from app.models.event import Event, EventSlot
from app.models.person import Person, TenantUser
from app.models.team import Skill, Team
from app.models.team_member import MemberSkill, TeamMember
from app.models.tenant import Tenant


@pytest.fixture
async def engine():
    eng = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
async def client(session_factory):
    async def override_get_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------


def _person(tenant_id: uuid.UUID, name: str, role: str | None = None) -> Person:
    return Person(
        tenant_id=tenant_id,
        email=f"{name.lower()}.{uuid.uuid4().hex[:6]}@example.com",
        display_name=name,
        role=role,
    )


async def seed_staffing(session: AsyncSession) -> SimpleNamespace:
    """Two tenants; the first has an audio and a lighting crew and one event.

    alice: audio (mixing, mic) and lighting (rigging)
    bob:   audio (mixing)
    dave:  seat holder with no team
    carol: on the roster but without a seat
    """
    tenant = Tenant(name="Acme Events", slug="acme")
    other_tenant = Tenant(name="Globex", slug="globex")
    session.add_all([tenant, other_tenant])
    await session.flush()

    owner = _person(tenant.id, "Olivia", role="owner")
    admin = _person(tenant.id, "Adam", role="admin")
    viewer = _person(tenant.id, "Vera")
    alice = _person(tenant.id, "Alice")
    bob = _person(tenant.id, "Bob")
    dave = _person(tenant.id, "Dave")
    carol = _person(tenant.id, "Carol")
    outsider = _person(other_tenant.id, "Otto", role="owner")
    people = [owner, admin, viewer, alice, bob, dave, carol, outsider]
    session.add_all(people)
    await session.flush()
    session.add_all([TenantUser(person_id=p.id) for p in people if p is not carol])

    audio = Team(tenant_id=tenant.id, name="Audio")
    lighting = Team(tenant_id=tenant.id, name="Lighting")
    foreign_team = Team(tenant_id=other_tenant.id, name="Foreign Crew")
    session.add_all([audio, lighting, foreign_team])
    await session.flush()

    mixing = Skill(tenant_id=tenant.id, team_id=audio.id, name="Mixing")
    mic = Skill(tenant_id=tenant.id, team_id=audio.id, name="Mic Handling")
    rigging = Skill(tenant_id=tenant.id, team_id=lighting.id, name="Rigging")
    foreign_skill = Skill(tenant_id=other_tenant.id, team_id=foreign_team.id, name="Welding")
    session.add_all([mixing, mic, rigging, foreign_skill])
    await session.flush()

    alice_audio = TeamMember(tenant_id=tenant.id, team_id=audio.id, user_id=alice.id)
    alice_lighting = TeamMember(tenant_id=tenant.id, team_id=lighting.id, user_id=alice.id)
    bob_audio = TeamMember(tenant_id=tenant.id, team_id=audio.id, user_id=bob.id)
    session.add_all([alice_audio, alice_lighting, bob_audio])
    await session.flush()

    session.add_all(
        [
            MemberSkill(tenant_id=tenant.id, team_member_id=alice_audio.id, skill_id=mixing.id),
            MemberSkill(tenant_id=tenant.id, team_member_id=alice_audio.id, skill_id=mic.id),
            MemberSkill(tenant_id=tenant.id, team_member_id=alice_lighting.id, skill_id=rigging.id),
            MemberSkill(tenant_id=tenant.id, team_member_id=bob_audio.id, skill_id=mixing.id),
        ]
    )

    event = Event(
        tenant_id=tenant.id,
        name="Summer Gala",
        date=datetime(2026, 7, 1, 18, 0, tzinfo=timezone.utc),
    )
    other_event = Event(
        tenant_id=tenant.id,
        name="Autumn Fair",
        date=datetime(2026, 9, 15, 10, 0, tzinfo=timezone.utc),
    )
    session.add_all([event, other_event])
    await session.flush()

    slot_mixing = EventSlot(
        tenant_id=tenant.id, event_id=event.id, team_id=audio.id, skill_id=mixing.id, quantity=2
    )
    slot_mic = EventSlot(tenant_id=tenant.id, event_id=event.id, team_id=audio.id, skill_id=mic.id)
    slot_rigging = EventSlot(
        tenant_id=tenant.id, event_id=event.id, team_id=lighting.id, skill_id=rigging.id
    )
    other_slot = EventSlot(
        tenant_id=tenant.id, event_id=other_event.id, team_id=audio.id, skill_id=mixing.id
    )
    session.add_all([slot_mixing, slot_mic, slot_rigging, other_slot])
    await session.commit()

    return SimpleNamespace(
        tenant=tenant,
        other_tenant=other_tenant,
        owner=owner,
        admin=admin,
        viewer=viewer,
        alice=alice,
        bob=bob,
        dave=dave,
        carol=carol,
        outsider=outsider,
        audio=audio,
        lighting=lighting,
        foreign_team=foreign_team,
        mixing=mixing,
        mic=mic,
        rigging=rigging,
        foreign_skill=foreign_skill,
        alice_audio=alice_audio,
        alice_lighting=alice_lighting,
        bob_audio=bob_audio,
        event=event,
        other_event=other_event,
        slot_mixing=slot_mixing,
        slot_mic=slot_mic,
        slot_rigging=slot_rigging,
        other_slot=other_slot,
    )


@pytest.fixture
async def seed(session_factory) -> SimpleNamespace:
    async with session_factory() as s:
        return await seed_staffing(s)


# ---------------------------------------------------------------------------
# Auth headers
# ---------------------------------------------------------------------------


def bearer(person_id: uuid.UUID, *, platform_admin: bool = False) -> dict[str, str]:
    token = create_access_token(person_id, platform_admin=platform_admin)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def owner_headers(seed) -> dict[str, str]:
    return bearer(seed.owner.id)


@pytest.fixture
def admin_headers(seed) -> dict[str, str]:
    return bearer(seed.admin.id)


@pytest.fixture
def viewer_headers(seed) -> dict[str, str]:
    return bearer(seed.viewer.id)


@pytest.fixture
def outsider_headers(seed) -> dict[str, str]:
    return bearer(seed.outsider.id)


@pytest.fixture
def platform_admin_headers() -> dict[str, str]:
    return bearer(uuid.uuid4(), platform_admin=True)


@pytest.fixture
def tenant_url(seed) -> str:
    return f"/api/v1/tenants/{seed.tenant.id}"
