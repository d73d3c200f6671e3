"""
Bookmarks API — Bookmark SQLAlchemy Model
==========================================

What:  ORM model representing the `bookmarks_table` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by BookmarkService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer primary key generated by the database; clients never choose ids
    - title / url: required text
    - description: optional text, may hold markup (sanitized on output, not on input)
    - rating: integer 1-5, enforced by the validation layer and a CHECK constraint
"""

from typing import Optional

from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookmarks_api.database import Base


class Bookmark(Base):
    """
    A saved link with a title, optional description and a 1-5 rating.

    Lifecycle:
        1. Created by insert (id assigned by the database)
        2. Read by list / get
        3. Mutated in place by partial update (only supplied fields change)
        4. Removed by delete (no tombstone)
    """

    __tablename__ = "bookmarks_table"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    url: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Bookmark(id={self.id}, title={self.title!r}, rating={self.rating})>"
