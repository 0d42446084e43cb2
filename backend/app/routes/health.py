"""
Trainer API Backend: Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   The service is only useful while MongoDB answers, so health means
       "the database answers a ping".
Who:   Called by Docker health checks, load balancers and monitoring.

Status levels:
    - healthy:   ping succeeded (HTTP 200)
    - unhealthy: ping failed or no repository is configured (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app import __version__
from app.schemas.trainer import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    """
    Ping the database through the trainer repository built at startup.

    Not wired through `Depends`: a missing repository must answer 503,
    not the 500 the dependency would raise.
    """
    db_status = "connected"
    overall = "healthy"

    repository = getattr(request.app.state, "trainer_repository", None)
    try:
        if repository is None:
            raise RuntimeError("trainer repository is not initialized")
        await repository.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    status_code = 200 if overall == "healthy" else 503
    return JSONResponse(status_code=status_code, content=body.model_dump())
