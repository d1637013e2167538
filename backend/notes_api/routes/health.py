"""
Notes API — Health Check Route
===============================

What:  Liveness endpoint for monitoring, container health checks and the
       frontend's "is the backend up" probe.
How:   Always answers 200 with status "OK" while the process is serving;
       additionally reports whether the database answers a SELECT 1.

Why liveness (not readiness):
    Clients use /health to find out whether the backend process is reachable
    at all. Store outages are reported in the `database` field rather than
    through the status code, so a database restart does not make the
    backend look dead.
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api import __version__
from notes_api.database import get_db_session
from notes_api.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Service start time for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(db: AsyncSession = Depends(get_db_session)) -> HealthResponse:
    db_status = "connected"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status="OK",
        message="Backend is running",
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
