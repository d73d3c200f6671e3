"""
Bookmarks API — Bearer Token Middleware
========================================

What:  Rejects every request that does not carry the configured API token.
Why:   The API has a single static credential; checking it in middleware
       guarantees no route, body parser or database call runs for an
       unauthorized request, including requests to paths that do not exist.
How:   Compares `Authorization: Bearer <token>` with settings.api_token using
       a constant-time comparison.

Response on failure (fixed shape, not the usual error envelope):
    HTTP 401
    {"error": "Unauthorized request"}
"""

import logging
import secrets
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from bookmarks_api.config import settings
from bookmarks_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

UNAUTHORIZED_BODY = {"error": "Unauthorized request"}


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token of an `Authorization: Bearer <token>` header value.

    The scheme is matched case-insensitively. Anything else (missing header,
    other schemes, empty token) yields None.
    """
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


class BearerTokenMiddleware(BaseHTTPMiddleware):
    """
    Short-circuits with 401 before routing when the bearer token is wrong.

    An empty settings.api_token never matches, so a deployment that forgot to
    configure API_TOKEN rejects everything instead of accepting everything.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        token = extract_bearer_token(request.headers.get("Authorization"))
        expected = settings.api_token

        if not token or not expected or not secrets.compare_digest(
            token.encode("utf-8"), expected.encode("utf-8")
        ):
            logger.warning(
                "[%s] Unauthorized request to path: %s",
                request_id_var.get(""),
                request.url.path,
            )
            return JSONResponse(status_code=401, content=UNAUTHORIZED_BODY)

        return await call_next(request)
