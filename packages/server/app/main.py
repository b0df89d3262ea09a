"""
Event Staffing API Server

Entry point for the FastAPI application.
"""

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.core.config import get_settings
from app.core.database import engine
from app.core.errors import register_error_handlers
from app.core.locks import close_lock_client, ping_lock_backend
from app.core.logs import configure_logging
from app.core.middleware import RequestContextMiddleware, SecurityHeadersMiddleware
from app.api.v1 import router as api_v1_router

settings = get_settings()
log = structlog.get_logger()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Event Staffing",
        description="Multi-tenant event staffing: teams, skills, events and assignments.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_error_handlers(app)

    # Middleware (last added is outermost)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for liveness probes."""
        return {"status": "ok"}

    @app.get("/ready", tags=["System"])
    async def readiness_check():
        """Readiness check: the database answers, and Redis too when locking uses it."""
        checks = {}
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["database"] = "ok"
        except Exception as exc:
            log.warning("ready.database_failed", error=str(exc))
            checks["database"] = "error"

        if settings.assignment_lock_enabled:
            try:
                await ping_lock_backend()
                checks["redis"] = "ok"
            except Exception as exc:
                log.warning("ready.redis_failed", error=str(exc))
                checks["redis"] = "error"

        ready = all(value == "ok" for value in checks.values())
        return {"status": "ready" if ready else "degraded", "checks": checks}

    @app.on_event("startup")
    async def on_startup():
        log.info("Event Staffing starting", lock_enabled=settings.assignment_lock_enabled)

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("Event Staffing shutting down")
        await close_lock_client()

    return app


app = create_app()
