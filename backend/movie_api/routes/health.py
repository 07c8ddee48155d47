"""
Movie API Backend — Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB (a no-op server command) and reports the result with the
       service version and uptime.

Status levels:
    healthy:   MongoDB answered the ping (HTTP 200)
    unhealthy: MongoDB unreachable (HTTP 503, stop routing traffic here)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from movie_api import __version__
from movie_api.database import get_database
from movie_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "MongoDB unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await db.command("ping")
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: MongoDB unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
