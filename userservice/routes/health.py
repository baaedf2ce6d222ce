"""
User Records Service — Health Check Route
==========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the document store and reports aggregate status.
Who:   Called by container health checks, load balancers, and monitoring.

Status levels:
    - healthy:   Store reachable
    - unhealthy: Store unreachable (still HTTP 200; the body carries the verdict)
"""

import logging
import time

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from userservice import __version__
from userservice.database import get_database, ping
from userservice.schemas.user import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(database: AsyncDatabase = Depends(get_database)) -> HealthResponse:
    """
    Check that the service can reach its store.

    Check details:
        Database: sends the `ping` admin command through the shared client
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await ping(database)
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
