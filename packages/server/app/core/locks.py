"""
Per-person assignment serialization.

Two concurrent assignment requests for the same person in the same event can
each pass the incompatibility check against the pre-existing rows and both
commit. When enabled, a Redis lock keyed on (tenant, event, user) spans the
eligibility checks and the commit.
"""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as redis
import structlog
from redis.exceptions import LockError

from app.core.config import get_settings
from app.core.errors import ConflictError

log = structlog.get_logger()

LOCK_KEY_PREFIX = "staffing:lock:assignment:"

_lock_client: redis.Redis | None = None


async def get_lock_client() -> redis.Redis:
    """Lazily connect to the Redis instance that holds assignment locks."""
    global _lock_client
    if _lock_client is None:
        _lock_client = redis.from_url(
            get_settings().redis_url,
            client_name="staffing-assignment-locks",
        )
    return _lock_client


async def close_lock_client() -> None:
    global _lock_client
    if _lock_client is not None:
        await _lock_client.aclose()
        _lock_client = None


async def ping_lock_backend() -> bool:
    client = await get_lock_client()
    return bool(await client.ping())


def assignment_lock_key(tenant_id: uuid.UUID, event_id: uuid.UUID, user_id: uuid.UUID) -> str:
    return f"{LOCK_KEY_PREFIX}{tenant_id}:{event_id}:{user_id}"


@asynccontextmanager
async def assignment_lock(
    tenant_id: uuid.UUID, event_id: uuid.UUID, user_id: uuid.UUID
) -> AsyncIterator[None]:
    settings = get_settings()
    if not settings.assignment_lock_enabled:
        yield
        return

    client = await get_lock_client()
    key = assignment_lock_key(tenant_id, event_id, user_id)
    lock = client.lock(
        key,
        timeout=settings.assignment_lock_timeout_seconds,
        blocking_timeout=settings.assignment_lock_timeout_seconds,
    )
    acquired = await lock.acquire()
    if not acquired:
        log.warning("assignment.lock_timeout", key=key)
        raise ConflictError("Another assignment for this user is in progress")
    try:
        yield
    finally:
        try:
            await lock.release()
        except LockError:
            # Expired before release; the holder outlived the timeout.
            log.warning("assignment.lock_expired", key=key)
