"""
WordTally Backend — Request Logging Middleware
===============================================

What:  One access log line per request: method, path, status, duration,
       request id and client address.
Why:   uvicorn's access log has no request id and no timing.

What we log vs what we DON'T log (privacy):
    ✅ method, path, status, duration, client IP, request ID
    ❌ request bodies (passwords), query strings (URLs users submit),
       the Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from wordtally.exceptions import UNEXPECTED_ERROR_MESSAGE
from wordtally.middleware.request_id import request_id_var
from wordtally.schemas.common import ErrorResponse

logger = logging.getLogger("wordtally.access")

QUIET_PATHS = {"/health"}


def internal_error_response() -> JSONResponse:
    body = ErrorResponse(
        error="internal_server_error",
        message=UNEXPECTED_ERROR_MESSAGE,
        request_id=request_id_var.get(""),
    )
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each completed request at a level chosen by its status:
    5xx → ERROR, 4xx → WARNING, everything else → INFO.

    Health probes are not logged.

    An exception no handler converted becomes a 500 error envelope here,
    inside RequestIDMiddleware, so the client still gets its X-Request-ID.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "[%s] Unhandled %s on %s %s: %s",
                request_id_var.get(""),
                type(e).__name__,
                request.method,
                path,
                str(e),
                exc_info=True,
            )
            response = internal_error_response()
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
