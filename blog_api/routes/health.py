"""
Blog API — Health Check Route
===============================

What:  Health check endpoint for monitoring and load balancer health checks.
How:   Pings MongoDB through the application's client and reports the result.

Status levels:
    - healthy:   Database answers ping (HTTP 200)
    - unhealthy: Database unreachable or not connected (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from blog_api import __version__
from blog_api.database import ping
from blog_api.schemas.post import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """Reports whether the document store answers a ping."""
    db = getattr(request.app.state, "database", None)
    connected = db is not None and await ping(db)

    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
