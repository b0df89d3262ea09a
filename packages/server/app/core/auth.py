"""
Authentication and Authorization for the staffing API.

Token issuance (OAuth exchange) lives outside this service; here we only:
- Decode the bearer JWT into a per-request RequestContext
- Carry platform-admin as an explicit capability on that context
- Provide tenant guard functions (member / manager) used by every endpoint
- Answer the seat question: is a person an active user of a tenant
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import jwt
import structlog
from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.core.config import get_settings
from app.core.database import get_session
from app.core.errors import ForbiddenError, UnauthorizedError
from app.models.person import Person, TenantUser
from staffing_shared.schemas.common import MANAGER_ROLES

log = structlog.get_logger()
settings = get_settings()

api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


class Capability(str, Enum):
    PLATFORM_ADMIN = "platform_admin"


class RequestContext:
    """The authenticated caller for one request."""

    def __init__(self, person_id: uuid.UUID, capabilities: frozenset[Capability] = frozenset()):
        self.person_id = person_id
        self.capabilities = capabilities

    @property
    def is_platform_admin(self) -> bool:
        return Capability.PLATFORM_ADMIN in self.capabilities


# ---------------------------------------------------------------------------
# JWT
# ---------------------------------------------------------------------------

def create_access_token(
    person_id: uuid.UUID,
    *,
    platform_admin: bool = False,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT for a person."""
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "sub": str(person_id),
        "platform_admin": platform_admin,
        "iat": now,
        "exp": exp,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])


def context_from_token(token: str) -> RequestContext:
    try:
        payload = decode_access_token(token)
        person_id = uuid.UUID(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise UnauthorizedError("Invalid or expired session")

    capabilities: set[Capability] = set()
    if payload.get("platform_admin"):
        capabilities.add(Capability.PLATFORM_ADMIN)
    return RequestContext(person_id=person_id, capabilities=frozenset(capabilities))


async def get_request_context(
    authorization: Optional[str] = Depends(api_key_header),
) -> RequestContext:
    """Main authentication dependency: Bearer JWT -> RequestContext."""
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Authentication required")
    return context_from_token(authorization[7:].strip())


# ---------------------------------------------------------------------------
# Tenant authorization
# ---------------------------------------------------------------------------

async def _get_caller_person(
    session: AsyncSession, ctx: RequestContext, tenant_id: uuid.UUID
) -> Person | None:
    result = await session.execute(
        select(Person).where(Person.id == ctx.person_id, Person.tenant_id == tenant_id)
    )
    return result.scalar_one_or_none()


async def is_tenant_member(
    session: AsyncSession, ctx: RequestContext, tenant_id: uuid.UUID
) -> bool:
    if ctx.is_platform_admin:
        return True
    return await _get_caller_person(session, ctx, tenant_id) is not None


async def is_tenant_manager(
    session: AsyncSession, ctx: RequestContext, tenant_id: uuid.UUID
) -> bool:
    if ctx.is_platform_admin:
        return True
    person = await _get_caller_person(session, ctx, tenant_id)
    return person is not None and person.role in MANAGER_ROLES


async def require_tenant_member(
    tenant_id: uuid.UUID,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_session),
) -> RequestContext:
    """Any person of the tenant (or a platform admin) can access this endpoint."""
    if not await is_tenant_member(session, ctx, tenant_id):
        log.info("auth.denied", tenant_id=str(tenant_id), person_id=str(ctx.person_id), required="member")
        raise ForbiddenError("Access denied to this tenant")
    return ctx


async def require_tenant_manager(
    tenant_id: uuid.UUID,
    ctx: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_session),
) -> RequestContext:
    """Requires tenant owner or admin (or a platform admin)."""
    if not await is_tenant_manager(session, ctx, tenant_id):
        log.info("auth.denied", tenant_id=str(tenant_id), person_id=str(ctx.person_id), required="manager")
        raise ForbiddenError("Only tenant owner or admin can perform this action")
    return ctx


# ---------------------------------------------------------------------------
# Seats
# ---------------------------------------------------------------------------

async def is_active_user(
    session: AsyncSession, tenant_id: uuid.UUID, person_id: uuid.UUID
) -> bool:
    """True when the person belongs to the tenant and holds a seat."""
    result = await session.execute(
        select(TenantUser.person_id)
        .join(Person, Person.id == TenantUser.person_id)
        .where(TenantUser.person_id == person_id, Person.tenant_id == tenant_id)
    )
    return result.first() is not None
