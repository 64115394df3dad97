"""
DocRelay Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and container probes.
How:   Pings MongoDB through the shared RecordStore and reports status.

Status levels:
    - healthy:   MongoDB answered the ping
    - unhealthy: MongoDB unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Depends

from docrelay import __version__
from docrelay.database import RecordStore, get_record_store
from docrelay.schemas.record import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    store: RecordStore = Depends(get_record_store),
) -> HealthResponse:
    connected = await store.ping()
    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
