"""
HRMS Employee Service — Health Check Route
===========================================

What:  GET /health for container probes and load balancers.
How:   Pings the primary through the shared handle.

Status levels:
    - healthy:   ping succeeded (HTTP 200)
    - unhealthy: ping failed   (HTTP 503, stop routing traffic here)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from pymongo.errors import PyMongoError

from hrms import __version__
from hrms.database import MongoInstance, get_mongo
from hrms.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    mongo: MongoInstance = Depends(get_mongo),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await mongo.ping()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
