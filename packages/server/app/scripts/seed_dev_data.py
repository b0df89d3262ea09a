"""
Seed a development database with one tenant, a small crew and an event,
then print bearer tokens for the seeded owner and a read-only member.

Usage:
    python -m app.scripts.seed_dev_data [--create-schema]

Uses STAFFING_DATABASE_URL (or the default from settings). Safe to re-run:
an existing tenant with the same slug is left alone.
"""

import argparse
import asyncio
from datetime import datetime, timedelta, timezone

from sqlmodel import select

from app.core.auth import create_access_token
from app.core.database import get_session_context, init_db
from app.models.event import Event, EventSlot
from app.models.event_template import EventTemplate, EventTemplateSlot
from app.models.person import Person, TenantUser
from app.models.skill_incompatibility import SkillIncompatibility
from app.models.team import Skill, Team
from app.models.team_member import MemberSkill, TeamMember
from app.models.tenant import Tenant
from staffing_shared.schemas.common import TenantRole
from staffing_shared.schemas.teams import canonical_pair

TENANT_SLUG = "acme-events"


async def seed(create_schema: bool) -> None:
    if create_schema:
        await init_db()

    async with get_session_context() as session:
        result = await session.execute(select(Tenant).where(Tenant.slug == TENANT_SLUG))
        if result.scalar_one_or_none():
            print(f"Tenant '{TENANT_SLUG}' already exists, nothing to do.")
            return

        tenant = Tenant(name="Acme Events", slug=TENANT_SLUG)
        session.add(tenant)
        await session.flush()

        owner = Person(tenant_id=tenant.id, email="owner@acme.dev", display_name="Olivia Owner",
                       role=TenantRole.OWNER.value)
        viewer = Person(tenant_id=tenant.id, email="viewer@acme.dev", display_name="Victor Viewer")
        crew = [
            Person(tenant_id=tenant.id, email=f"{name.lower()}@acme.dev", display_name=name)
            for name in ("Alice", "Bob", "Chen")
        ]
        session.add_all([owner, viewer, *crew])
        await session.flush()
        session.add_all([TenantUser(person_id=p.id) for p in (owner, viewer, *crew)])

        audio = Team(tenant_id=tenant.id, name="Audio", description="Front of house and monitors")
        lighting = Team(tenant_id=tenant.id, name="Lighting")
        session.add_all([audio, lighting])
        await session.flush()

        mixing = Skill(tenant_id=tenant.id, team_id=audio.id, name="Mixing")
        mic = Skill(tenant_id=tenant.id, team_id=audio.id, name="Mic Handling")
        rigging = Skill(tenant_id=tenant.id, team_id=lighting.id, name="Rigging")
        session.add_all([mixing, mic, rigging])
        await session.flush()

        id1, id2 = canonical_pair(mixing.id, mic.id)
        session.add(SkillIncompatibility(tenant_id=tenant.id, skill_id_1=id1, skill_id_2=id2))

        grants = [
            (crew[0], audio, [mixing, mic]),
            (crew[1], audio, [mixing]),
            (crew[2], lighting, [rigging]),
        ]
        for person, team, skills in grants:
            member = TeamMember(tenant_id=tenant.id, team_id=team.id, user_id=person.id)
            session.add(member)
            await session.flush()
            session.add_all(
                [MemberSkill(tenant_id=tenant.id, team_member_id=member.id, skill_id=s.id) for s in skills]
            )

        template = EventTemplate(tenant_id=tenant.id, name="Concert")
        session.add(template)
        await session.flush()
        requirements = [(audio, mixing, 2), (audio, mic, 1), (lighting, rigging, 2)]
        session.add_all(
            [
                EventTemplateSlot(tenant_id=tenant.id, template_id=template.id, team_id=team.id,
                                  skill_id=skill.id, quantity=qty)
                for team, skill, qty in requirements
            ]
        )

        event = Event(
            tenant_id=tenant.id,
            template_id=template.id,
            name="Summer Concert",
            date=datetime.now(timezone.utc) + timedelta(days=30),
        )
        session.add(event)
        await session.flush()
        session.add_all(
            [
                EventSlot(tenant_id=tenant.id, event_id=event.id, team_id=team.id,
                          skill_id=skill.id, quantity=qty)
                for team, skill, qty in requirements
            ]
        )

    print(f"Seeded tenant {tenant.id} ({TENANT_SLUG}), event {event.id}")
    print(f"Owner token:  {create_access_token(owner.id)}")
    print(f"Viewer token: {create_access_token(viewer.id)}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed development data.")
    parser.add_argument(
        "--create-schema",
        action="store_true",
        help="Create tables from the models first (no migrations).",
    )
    args = parser.parse_args()
    asyncio.run(seed(args.create_schema))


if __name__ == "__main__":
    main()
