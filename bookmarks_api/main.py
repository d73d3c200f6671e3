"""
Bookmarks API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn bookmarks_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────────────┐
    │                        FastAPI App                          │
    │                                                             │
    │  Middleware Chain (outermost first):                        │
    │  Req ID → Logging → Security Headers → CORS → Bearer Token  │
    │                                                             │
    │  Routes:                                                    │
    │  /api/bookmarks (GET, POST)   /api/bookmarks/{id}           │
    │  (GET, PATCH, DELETE)         /health (GET)                 │
    │                                                             │
    │  Exception Handlers:                                        │
    │  Validation→400 │ NotFound→404 │ HTTP→status │ DB/other→500 │
    └─────────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookmarks_api import __version__
from bookmarks_api.config import settings
from bookmarks_api.database import dispose_engine
from bookmarks_api.exceptions import NotFoundError, ValidationError
from bookmarks_api.middleware.auth import BearerTokenMiddleware
from bookmarks_api.middleware.logging import RequestLoggingMiddleware
from bookmarks_api.middleware.request_id import RequestIDMiddleware, request_id_var
from bookmarks_api.middleware.security_headers import SecurityHeadersMiddleware
from bookmarks_api.routes import bookmarks, health
from bookmarks_api.services.validation import INVALID_JSON_MESSAGE

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "server error"


def error_body(message: str) -> dict:
    """The error envelope shared by every 4xx/5xx response except 401."""
    return {"error": {"message": message}}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before anything else logs.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Containers capture stdout
        ],
        force=True,
    )

    # Our access log replaces uvicorn's; SQL echo is controlled by LOG_LEVEL=DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, validate critical settings.
    Shutdown: dispose the database engine.
    """
    setup_logging()
    logger.info("Bookmarks API %s starting up (%s)", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: without a token every request gets 401, which is safe
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Bookmarks API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the JSON error envelope.

    Handler hierarchy:
        ValidationError         → 400 (field-specific message)
        RequestValidationError  → 400 (malformed JSON, non-integer id)
        NotFoundError           → 404 "Bookmark not found"
        StarletteHTTPException  → its own status (unknown route, bad method)
        SQLAlchemyError         → 500 "server error"
        Exception (fallback)    → 500 "server error"

    Security: 500 responses never include SQL, stack traces or exception text
    in production. Details are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(status_code=400, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = exc.errors()
        first = errors[0] if errors else {}
        if first.get("type") == "json_invalid":
            message = INVALID_JSON_MESSAGE
        else:
            # loc is e.g. ("path", "bookmark_id"); integer parts are list or
            # character offsets and name nothing a client could fix
            location = ".".join(
                part for part in first.get("loc", ())
                if isinstance(part, str) and part not in ("body", "path", "query")
            )
            message = first.get("msg", "Invalid request")
            if location:
                message = f"Invalid '{location}': {message}"
        logger.warning("[%s] Request validation error: %s", rid, message)
        return JSONResponse(status_code=400, content=error_body(message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=error_body(exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s", rid, str(exc), exc_info=True)
        message = SERVER_ERROR_MESSAGE if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=error_body(message))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        message = SERVER_ERROR_MESSAGE if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=error_body(message))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Tests build their own instance through this factory and override the
    get_db_session dependency on it.
    """
    app = FastAPI(
        title="Bookmarks API",
        description=(
            "Bookmark CRUD service with bearer-token authorization, payload "
            "validation and XSS-sanitized output."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition: the last one added
    # sees the request first.
    app.add_middleware(BearerTokenMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["Location", "X-Request-ID"],
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(bookmarks.router)
    app.include_router(health.router)

    return app


# uvicorn expects `bookmarks_api.main:app` to be importable
app = create_app()
