"""
Bookmarks API — Pydantic Response Schemas
==========================================

What:  Pydantic models defining what the API returns.
Why:   Automatic serialization and OpenAPI doc generation.

Request bodies are deliberately NOT modelled here: create and update payloads
are read as raw JSON objects and checked by services/validation.py, so the
400 messages stay exactly under our control instead of FastAPI's 422 format.
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookmarkResponse(BaseModel):
    """
    Outbound representation of a bookmark.

    title, url and description are always sanitized before this model is
    built (see services/sanitize.py); rating and id are passed through.
    """
    id: int = Field(description="Identifier assigned by the database")
    title: str = Field(description="Bookmark title (HTML-sanitized)")
    url: str = Field(description="Absolute http(s) URL (HTML-sanitized)")
    description: Optional[str] = Field(
        default=None,
        description="Free text description (HTML-sanitized), null when absent"
    )
    rating: int = Field(ge=1, le=5, description="Rating from 1 to 5")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorBody(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    Standard error envelope for 400, 404 and 500 responses.

    Example:
        {"error": {"message": "'url' must be a valid URL"}}
    """
    error: ErrorBody


class UnauthorizedResponse(BaseModel):
    """Fixed 401 body: {"error": "Unauthorized request"}."""
    error: str = Field(default="Unauthorized request")


class HealthResponse(BaseModel):
    """
    Health check response showing service and database status.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
