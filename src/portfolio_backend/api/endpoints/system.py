"""System endpoints for the portfolio API."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Request
from sqlalchemy.exc import SQLAlchemyError

from portfolio_backend.core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
async def get_system_health(request: Request) -> dict[str, object]:
    """Health check covering the contact store.

    Args:
        request: Incoming request, used to reach the application database

    Returns:
        Dictionary with overall status, component health and version info
    """
    try:
        request.app.state.database.ping()
        db_status = "healthy"
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database health check failed: %s", e)
        db_status = f"unhealthy: {e.__class__.__name__}"

    return {
        "status": "healthy" if db_status == "healthy" else "unhealthy",
        "timestamp": int(time.time()),
        "components": {
            "database": db_status,
        },
        "version": settings.app_version,
    }
