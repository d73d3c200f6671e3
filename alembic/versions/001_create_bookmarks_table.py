"""Create bookmarks table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `bookmarks_table` table holding every bookmark row.
Rollback: downgrade() drops the table entirely (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the bookmarks table. Column docs live in bookmarks_api/models/bookmark.py."""
    op.create_table(
        "bookmarks_table",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "rating >= 1 AND rating <= 5",
            name="ck_bookmarks_rating_range",
        ),
    )


def downgrade() -> None:
    """Drop the bookmarks table. WARNING: all bookmark data is permanently lost."""
    op.drop_table("bookmarks_table")
