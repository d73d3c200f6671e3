"""
Bookmarks API — Application Package Initializer
================================================

What: Marks the `bookmarks_api` directory as a Python package.
Why:  Enables module imports like `from bookmarks_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service is a thin layered CRUD API:

    ┌─────────────────────────────────────┐
    │     Middleware (auth, tracing)      │  ← Bearer token, request id, access log
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Validation & Sanitization Services │  ← Payload rules, XSS-safe output
    ├─────────────────────────────────────┤
    │      Access Layer (BookmarkService) │  ← One SQL statement per operation
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
