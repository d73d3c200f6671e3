"""
Bookmarks API — Request Logging Middleware
===========================================

What:  One access-log line per HTTP request.
Why:   Method, path, status and duration, correlated by request id, are enough
       to follow any request through the logs.

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: request bodies, the Authorization header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from bookmarks_api.middleware.request_id import request_id_var

logger = logging.getLogger("bookmarks_api.access")


def level_for_status(status_code: int) -> int:
    """5xx → ERROR, 4xx → WARNING (401s included), otherwise INFO."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request once its response exists, health probes included."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        fields = {
            "request_id": request_id_var.get(""),
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            # request.client is None under some test transports
            "client_ip": request.client.host if request.client else "unknown",
        }
        logger.log(
            level_for_status(response.status_code),
            "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
            fields,
            extra=fields,
        )
        return response
