"""
Bookmarks API — Output Sanitization
====================================

What:  Neutralizes HTML/script payloads in the text fields of every bookmark
       the API returns.
Why:   Bookmarks are stored exactly as submitted; a title such as
       `<script>alert(1)</script>` must reach API consumers as inert text.
How:   title and description go through a bleach Cleaner with a short
       whitelist of harmless inline tags. Anything outside the whitelist is
       HTML-entity-escaped (strip=False), unknown attributes such as
       `onerror` are dropped, comments removed.
       url only has `<`, `>` and `"` escaped, so query strings keep their `&`.

    Input:  Bad image <img src="https://x.test/a.png" onerror="alert(1);">
    Output: Bad image <img src="https://x.test/a.png">

    Input:  Ur haxxed! <script>alert("xss");</script>
    Output: Ur haxxed! &lt;script&gt;alert("xss");&lt;/script&gt;

The transform is deterministic. Idempotence is not relied on: it is applied
exactly once, when the response is built, and stored rows are never rewritten.
"""

from typing import Optional

from bleach.sanitizer import Cleaner

from bookmarks_api.models.bookmark import Bookmark
from bookmarks_api.schemas.bookmark import BookmarkResponse

ALLOWED_TAGS = frozenset({
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "em",
    "i",
    "img",
    "li",
    "ol",
    "p",
    "pre",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target"],
    "abbr": ["title"],
    "img": ["src", "alt", "title", "width", "height"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

_cleaner = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)

_URL_MARKUP_ESCAPES = str.maketrans({"<": "&lt;", ">": "&gt;", '"': "&quot;"})


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Escape disallowed markup in a single field. None passes through."""
    if value is None:
        return None
    return _cleaner.clean(value)


def sanitize_url(value: Optional[str]) -> Optional[str]:
    """
    Escape only the characters that can open markup or close an attribute.

    Validated URLs never carry tags, and running them through the HTML cleaner
    would turn every `&` between query parameters into `&amp;`.
    """
    if value is None:
        return None
    return value.translate(_URL_MARKUP_ESCAPES)


def serialize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """
    Build the outbound representation of a bookmark.

    title and description go through the HTML cleaner, url through
    sanitize_url; id and rating are numeric and copied as-is.
    """
    return BookmarkResponse(
        id=bookmark.id,
        title=sanitize_text(bookmark.title),
        url=sanitize_url(bookmark.url),
        description=sanitize_text(bookmark.description),
        rating=bookmark.rating,
    )
