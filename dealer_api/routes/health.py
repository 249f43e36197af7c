"""
Dealerships API — Root & Health Check Routes
==============================================

What:  GET / (welcome text) and GET /health (service + store status).
Why:   Container health checks and load balancers need a cheap endpoint that tells
       whether the instance can actually serve data.
How:   /health pings MongoDB; an unreachable store makes the instance
       unhealthy (HTTP 503).
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from pymongo.asynchronous.database import AsyncDatabase

from dealer_api import __version__
from dealer_api.database import get_database, ping
from dealer_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

WELCOME_TEXT = "Welcome to the Dealerships API"

# Initialized once when the module loads
_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Welcome message")
async def root() -> str:
    return WELCOME_TEXT


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: AsyncDatabase = Depends(get_database),
) -> HealthResponse:
    """
    Check the health of the service and the document store.

    Why ping (not a query): runs every few seconds, must be essentially free.
    """
    if await ping(database):
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
