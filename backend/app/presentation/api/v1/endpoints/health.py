"""Health check endpoints."""

import logging

from fastapi import APIRouter
from sqlalchemy import text

from app.config import get_settings
from app.infrastructure.database.session import engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
    }


@router.get("/health/db")
async def database_health() -> dict:
    """Round-trips a trivial query to the database."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Database health check failed: %s", exc)
        return {"status": "unhealthy", "database": "unreachable"}
    return {"status": "healthy", "database": "reachable"}
