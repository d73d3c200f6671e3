"""
Bookmarks API — Bookmark Route Handlers
========================================

What:  The five REST operations on /api/bookmarks.
How:   Thin handlers: validate the payload, call the access layer, serialize
       through the sanitizer. Errors are raised as exceptions and rendered by
       the global handlers in main.py.

Route Inventory:
    GET    /api/bookmarks        → 200 list of sanitized bookmarks
    POST   /api/bookmarks        → 201 + Location header, sanitized bookmark
    GET    /api/bookmarks/{id}   → 200 sanitized bookmark
    PATCH  /api/bookmarks/{id}   → 204, partial update
    DELETE /api/bookmarks/{id}   → 204

Single-resource flow:
    Every /{id} route depends on get_existing_bookmark, so exactly one lookup
    runs before the verb-specific action:
        START → LOOKUP → FOUND     → act (GET / PATCH / DELETE)
                       → NOT_FOUND → 404 {"error": {"message": "Bookmark not found"}}
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.database import get_db_session
from bookmarks_api.exceptions import NotFoundError, ValidationError
from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.schemas.bookmark import (
    BookmarkResponse,
    ErrorResponse,
    UnauthorizedResponse,
)
from bookmarks_api.services.bookmark_service import bookmark_service
from bookmarks_api.services.sanitize import serialize_bookmark
from bookmarks_api.services.validation import (
    INVALID_JSON_MESSAGE,
    validate_bookmark_update,
    validate_new_bookmark,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/bookmarks",
    tags=["Bookmarks"],
    responses={401: {"description": "Missing or invalid bearer token", "model": UnauthorizedResponse}},
)


async def get_existing_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Bookmark:
    """
    Look up the bookmark named in the path or fail with 404.

    Shares the request's session with the handler (FastAPI caches the
    get_db_session dependency per request).
    """
    bookmark = await bookmark_service.get_by_id(db, bookmark_id)
    if bookmark is None:
        logger.warning("Bookmark with id %s was not found", bookmark_id)
        raise NotFoundError(resource="Bookmark", resource_id=bookmark_id)
    return bookmark


async def read_json_body(request: Request) -> Any:
    """Decode the request body, mapping undecodable input to a 400."""
    try:
        return await request.json()
    except ValueError:
        raise ValidationError(message=INVALID_JSON_MESSAGE)


@router.get(
    "",
    response_model=List[BookmarkResponse],
    summary="List all bookmarks",
)
async def list_bookmarks(
    db: AsyncSession = Depends(get_db_session),
) -> List[BookmarkResponse]:
    bookmarks = await bookmark_service.list_all(db)
    return [serialize_bookmark(bookmark) for bookmark in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Invalid payload", "model": ErrorResponse}},
    summary="Create a bookmark",
    description=(
        "Requires title, url (absolute http/https URL) and rating (1-5); "
        "description is optional. Responds with the created bookmark and a "
        "Location header pointing at it."
    ),
)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: Any = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> BookmarkResponse:
    new_bookmark = validate_new_bookmark(payload)

    bookmark = await bookmark_service.insert(db, new_bookmark)
    logger.info("Bookmark with id %s created", bookmark.id)

    response.headers["Location"] = str(
        request.url_for("get_bookmark", bookmark_id=str(bookmark.id))
    )
    return serialize_bookmark(bookmark)


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Get a bookmark by id",
)
async def get_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
) -> BookmarkResponse:
    return serialize_bookmark(bookmark)


@router.patch(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "No updatable field supplied or invalid field", "model": ErrorResponse},
        404: {"description": "Bookmark not found", "model": ErrorResponse},
    },
    summary="Partially update a bookmark",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": {"type": "object"}}},
        }
    },
)
async def update_bookmark(
    request: Request,
    bookmark: Bookmark = Depends(get_existing_bookmark),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Merge any subset of title, url, description and rating into the bookmark.

    The body is read inside the handler rather than declared as a parameter,
    so the lookup always answers first: an absent id is 404 even when the
    body is malformed.

    The row can disappear between the lookup and the UPDATE (a concurrent
    DELETE); a zero affected-row count is reported as 404, never as 204.
    """
    changes = validate_bookmark_update(await read_json_body(request))

    updated = await bookmark_service.update_by_id(db, bookmark.id, changes)
    if not updated:
        logger.warning("Bookmark with id %s vanished before update", bookmark.id)
        raise NotFoundError(resource="Bookmark", resource_id=bookmark.id)

    logger.info("Bookmark with id %s updated (%s)", bookmark.id, ", ".join(sorted(changes)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{bookmark_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Bookmark not found", "model": ErrorResponse}},
    summary="Delete a bookmark",
)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    deleted = await bookmark_service.delete_by_id(db, bookmark.id)
    if not deleted:
        raise NotFoundError(resource="Bookmark", resource_id=bookmark.id)

    logger.info("Bookmark with id %s deleted", bookmark.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
