"""
DocRelay Backend — Request ID Middleware
=========================================

What:  Gives each request a correlation ID and returns it as X-Request-ID.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, '.', '_' or '-'; anything else (empty, too long,
       spaces, control characters) is replaced by a fresh 8-char ID so it
       cannot garble the log line it is written into.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Client ID if it is a safe log token, otherwise a generated one."""
    if supplied and _VALID_REQUEST_ID.match(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
