"""
Membership API - Liveness & Health Routes
=========================================

What:  GET / (plain-text liveness) and GET /health (dependency check).
Who:   Load balancers, container health checks and the frontend's
       "is the backend up" probe.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from membership_api import __version__
from membership_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness probe",
)
async def root() -> str:
    return "Membership API is running"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check that the database answers a trivial query.

    Database: executes SELECT 1 on the engine built at startup.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        engine = request.app.state.engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, AttributeError) as e:
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
