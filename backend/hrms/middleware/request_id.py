"""
HRMS Employee Service — Request ID Middleware
==============================================

What:  Tags every request with a short correlation id and returns it in the
       `X-Request-ID` response header. Responses built by route exception
       handlers pass back through here; the catch-all 500 is rendered outside
       this middleware, so its handler in `hrms.main` sets the header itself.
How:   Reuses the caller's `X-Request-ID` when present, otherwise the first
       8 characters of a UUID4. The id is stored in a ContextVar (read by the
       access logger and the exception handlers) and on `request.state`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests share a thread but not this value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request id before any handler runs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
