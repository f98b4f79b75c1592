"""
WordTally Backend — Request ID Middleware
==========================================

What:  Tags every request with a short correlation id and echoes it back in
       the X-Request-ID response header.
Why:   Error responses carry the same id, so a client report can be matched
       to the server log lines of that request.
How:   A client-supplied X-Request-ID is reused; otherwise 8 hex characters
       of a fresh UUID. The id lives in a ContextVar so log calls and
       exception handlers deep in the request can read it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

MAX_CLIENT_ID_LENGTH = 64


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns and propagates the per-request correlation id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", "")[:MAX_CLIENT_ID_LENGTH] or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
