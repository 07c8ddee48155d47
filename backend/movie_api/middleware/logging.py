"""
Movie API Backend — Request Logging Middleware
================================================

What:  One access-log line per request: method, path with query string,
       status, duration, request id and client address.
Who:   Applied to every request except /health.

Level by status:
    5xx → ERROR, 4xx → WARNING, otherwise INFO

Privacy:
    Bodies and the Authorization header are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from movie_api.middleware.request_id import request_id_var

logger = logging.getLogger("movie_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Structured access log; replaces uvicorn's access log (silenced in main)."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        target = f"{path}?{request.url.query}" if request.url.query else path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            target,
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
