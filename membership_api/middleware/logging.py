"""
Membership API - Request Logging Middleware
===========================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request id and client address.

Example:
    2024-06-27T10:15:02 [INFO] membership_api.access: PUT /members/3f.../edit 200 4.2ms [1a2b3c4d] from 127.0.0.1

Level by status: 5xx → ERROR, 4xx → WARNING, otherwise INFO.
Request bodies are never logged (they contain personal data).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from membership_api.middleware.request_id import request_id_var

logger = logging.getLogger("membership_api.access")

# Polled by health checks every few seconds
SKIPPED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request once its response is ready."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for_status(status),
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
