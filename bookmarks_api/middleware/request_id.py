"""
Bookmarks API — Request ID Middleware
======================================

What:  Assigns a correlation id to each request and returns it in the response.
Why:   Lets a client quote one id that matches every server log line of its request.
How:   Reuses the client's X-Request-ID header or generates a short uuid,
       stores it in a ContextVar and request.state, echoes it as a header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Outermost middleware; every other middleware and handler can read the id."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 characters is enough to correlate log lines and short enough to read
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
