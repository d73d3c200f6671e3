"""
Bookmarks API — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the error scenarios of the API.
Why:   Custom exceptions let services signal a failure once and have the
       global handlers (registered in main.py) turn it into the right status
       code and the standard JSON envelope.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    BookmarksError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    └── NotFoundError     → 404 Not Found

Authorization failures are not exceptions: the bearer-token middleware
answers 401 itself, before routing.

Error envelope (every non-401 error):
    {"error": {"message": "Bookmark not found"}}
"""

from typing import Any, Dict, Optional


class BookmarksError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookmarksError):
    """
    Raised when a request payload fails validation.

    When:    Missing required field, malformed URL, out-of-range or non-numeric
             rating, empty update payload.
    HTTP:    400 Bad Request

    Validation errors are raised before the access layer is touched, so a
    rejected request never reaches the database.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BookmarksError):
    """
    Raised when a lookup by id yields no row.

    The access layer returns None for a missing row; routes convert that into
    this exception so the 404 body stays identical across GET, PATCH and DELETE.
    """

    def __init__(
        self,
        resource: str = "Bookmark",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource_id = resource_id

