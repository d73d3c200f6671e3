"""
Bookmarks API — Bookmark Service (Access Layer)
================================================

What:  Translates CRUD intents into queries against the bookmarks table.
Why:   Keeps SQL out of the route handlers and gives every intent one place
       to be tested against a mocked session.
How:   Each method takes the request's AsyncSession and issues exactly one
       statement. Results are plain ORM rows or affected-row counts.

Error Handling Strategy:
    Unlike the rest of the service layer, the access layer does not wrap
    database failures: any SQLAlchemyError propagates unchanged to the global
    handler, which answers 500. "Not found" is never an error here:
    get_by_id returns None and update/delete return a row count of 0.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bookmarks_api.models.bookmark import Bookmark

logger = logging.getLogger(__name__)

# Columns a client may set on create or change on update; id never appears here
WRITABLE_FIELDS = ("title", "url", "description", "rating")


class BookmarkService:
    """
    Stateless access layer for bookmark rows.

    Responsibilities:
        - list_all():     every row, ordered by id
        - get_by_id():    single row or None
        - insert():       new row with its generated id
        - update_by_id(): merge supplied fields, return affected-row count
        - delete_by_id(): remove a row, return affected-row count
    """

    async def list_all(self, db: AsyncSession) -> List[Bookmark]:
        """Return all bookmarks, oldest id first. No pagination."""
        result = await db.execute(select(Bookmark).order_by(Bookmark.id))
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, bookmark_id: int) -> Optional[Bookmark]:
        """
        Fetch a single bookmark.

        Returns:
            The Bookmark row, or None when no row has this id.
        """
        result = await db.execute(
            select(Bookmark).where(Bookmark.id == bookmark_id)
        )
        return result.scalar_one_or_none()

    async def insert(self, db: AsyncSession, new_bookmark: Dict[str, Any]) -> Bookmark:
        """
        Persist a new bookmark and return it with its generated id.

        Only the writable fields are copied from `new_bookmark`; an `id` key,
        if present, is ignored so the database always assigns the identifier.
        The flush sends the INSERT inside the request transaction; the commit
        happens when the session dependency exits.
        """
        bookmark = Bookmark(
            **{field: new_bookmark.get(field) for field in WRITABLE_FIELDS}
        )
        db.add(bookmark)
        await db.flush()
        logger.debug("Inserted bookmark %s", bookmark.id)
        return bookmark

    async def update_by_id(
        self,
        db: AsyncSession,
        bookmark_id: int,
        fields: Dict[str, Any],
    ) -> int:
        """
        Merge the supplied fields into an existing bookmark.

        Keys outside WRITABLE_FIELDS and keys whose value is None are dropped,
        so only the fields the client actually sent change.

        Returns:
            Number of affected rows: 1 on success, 0 when the id does not
            exist (or nothing was left to update). Callers must handle 0.
        """
        changes = {
            key: value
            for key, value in fields.items()
            if key in WRITABLE_FIELDS and value is not None
        }
        if not changes:
            return 0

        result = await db.execute(
            update(Bookmark).where(Bookmark.id == bookmark_id).values(**changes)
        )
        return result.rowcount

    async def delete_by_id(self, db: AsyncSession, bookmark_id: int) -> int:
        """Remove a bookmark. Returns the number of deleted rows (0 or 1)."""
        result = await db.execute(
            delete(Bookmark).where(Bookmark.id == bookmark_id)
        )
        return result.rowcount


# ── Singleton Instance ────────────────────────────────────────────────────
bookmark_service = BookmarkService()
