"""
DocRelay Backend — Access Log Middleware
=========================================

One line per request, tagged with the storage action the route performs:

    [a1b2c3d4] Read GET /read -> 200 (4.2ms, 10.0.0.7)
    [a1b2c3d4] Create POST /create -> 500 (30012.9ms, 10.0.0.7)

Routes that touch no storage are tagged "-". Level follows the status:
5xx ERROR, 4xx WARNING, otherwise INFO. Bodies are never logged since
records can hold anything. /health is not logged at all.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from docrelay.middleware.request_id import request_id_var
from docrelay.routes.records import ROUTE_ACTIONS

logger = logging.getLogger("docrelay.access")

NO_ACTION = "-"


def action_for(method: str, path: str) -> str:
    return ROUTE_ACTIONS.get((method, path.rstrip("/") or "/"), NO_ACTION)


def level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    # Probed every few seconds by container health checks
    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000

        method = request.method
        action = action_for(method, path)
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            level_for(response.status_code),
            "[%s] %s %s %s -> %d (%.1fms, %s)",
            rid,
            action,
            method,
            path,
            response.status_code,
            duration_ms,
            client_ip,
            extra={
                "request_id": rid,
                "action": action,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
