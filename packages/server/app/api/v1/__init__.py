"""
API v1 Router

All tenant-scoped endpoints are prefixed with /tenants/{tenant_id}.
"""

from fastapi import APIRouter
from . import assignments, events, members, teams, templates

TENANT_PREFIX = "/tenants/{tenant_id}"

router = APIRouter()

router.include_router(teams.router, prefix=TENANT_PREFIX, tags=["Teams"])
router.include_router(members.router, prefix=TENANT_PREFIX, tags=["Members"])
router.include_router(templates.router, prefix=TENANT_PREFIX, tags=["Event Templates"])
router.include_router(events.router, prefix=TENANT_PREFIX, tags=["Events"])
router.include_router(assignments.router, prefix=TENANT_PREFIX, tags=["Assignments"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            f"{TENANT_PREFIX}/teams",
            f"{TENANT_PREFIX}/skill-incompatibilities",
            f"{TENANT_PREFIX}/event-templates",
            f"{TENANT_PREFIX}/events",
            f"{TENANT_PREFIX}/assignments",
        ],
    }
