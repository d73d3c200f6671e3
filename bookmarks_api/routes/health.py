"""
Bookmarks API — Health Check Route
===================================

What:  Reports whether the service can reach its database.
Who:   Monitoring and container health probes (they must send the bearer token;
       the auth middleware makes no exception for this path).

Status levels:
    - healthy:   database answered SELECT 1 (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api import __version__
from bookmarks_api.database import get_db_session
from bookmarks_api.schemas.bookmark import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        # Leave the session clean so the dependency's commit does not raise again
        await db.rollback()
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
