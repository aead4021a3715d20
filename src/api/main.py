"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from infrastructure.database.dependencies import (
    close_database_connections,
    get_write_engine,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from membership.presentation import router as membership_router

settings = get_settings()
configure_logging(debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def huddle_lifespan(app: FastAPI):
    """Application lifespan context.

    The database engine is created lazily on first request and disposed
    on shutdown.
    """
    logger.info("application_started", version=__version__)
    yield
    await close_database_connections()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Event membership and capacity for sports meetups",
    version=__version__,
    lifespan=huddle_lifespan,
)

# Include Membership bounded context routes
app.include_router(membership_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db() -> dict:
    """Check database connection health."""
    try:
        async with get_write_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("database_health_check_failed", error=str(e))
        return {"status": "error", "connected": False, "error": str(e)}

    return {"status": "ok", "connected": True}
