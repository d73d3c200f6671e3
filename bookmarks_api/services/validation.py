"""
Bookmarks API — Payload Validation
===================================

What:  Checks create and partial-update payloads before anything touches the
       database.
Why:   The API promises field-specific 400 messages (e.g. "Missing url in
       request body"), which FastAPI's automatic 422 body cannot express.
How:   Routes hand over the raw decoded JSON object; each rule raises
       ValidationError with the client-facing message, and the global handler
       renders it as {"error": {"message": ...}}.

Create rules, checked in order (first failure wins):
    1. title, url, rating present and non-empty (first missing field is named)
    2. url is an absolute http(s) URL
    3. rating is an integer-like value within [1, 5]

Update rules:
    1. at least one of title, url, description, rating supplied
    2. every supplied field obeys the same rules as on create
"""

import logging
from typing import Any, Dict, Optional

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from bookmarks_api.exceptions import ValidationError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "url", "rating")
UPDATABLE_FIELDS = ("title", "url", "description", "rating")

MIN_RATING = 1
MAX_RATING = 5

INVALID_URL_MESSAGE = "'url' must be a valid URL"
INVALID_RATING_MESSAGE = f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}"
EMPTY_UPDATE_MESSAGE = (
    "Request body must contain either 'title', 'url', 'description', or 'rating'"
)
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"
INVALID_JSON_MESSAGE = "Request body must be valid JSON"

_http_url_adapter = TypeAdapter(HttpUrl)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def ensure_json_object(payload: Any) -> Dict[str, Any]:
    """Reject JSON arrays and scalars; bookmarks are always sent as objects."""
    if not isinstance(payload, dict):
        raise ValidationError(message=NOT_AN_OBJECT_MESSAGE)
    return payload


def validate_text(field: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(message=f"'{field}' must be a string", field=field)
    return value


def validate_url(value: Any) -> str:
    """
    Accept only absolute web URLs (http/https scheme plus host).

    The original string is returned untouched; pydantic is used purely as a
    parser, so its normalized form (trailing slash etc.) is never stored.
    """
    if not isinstance(value, str):
        raise ValidationError(message=INVALID_URL_MESSAGE, field="url")
    try:
        _http_url_adapter.validate_python(value.strip())
    except PydanticValidationError:
        logger.info("Rejected invalid url %r", value)
        raise ValidationError(message=INVALID_URL_MESSAGE, field="url")
    return value


def parse_rating(value: Any) -> int:
    """
    Coerce an integer-like rating and check its range.

    Accepted: ints, integral floats (4.0) and numeric strings ("4").
    Rejected: booleans, fractional numbers, non-numeric strings, anything
    outside [1, 5].
    """
    rating: Optional[int] = None
    if isinstance(value, bool):
        rating = None
    elif isinstance(value, int):
        rating = value
    elif isinstance(value, float) and value.is_integer():
        rating = int(value)
    elif isinstance(value, str):
        try:
            rating = int(value.strip())
        except ValueError:
            rating = None

    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(message=INVALID_RATING_MESSAGE, field="rating")
    return rating


def validate_new_bookmark(payload: Any) -> Dict[str, Any]:
    """
    Validate a create payload and build the candidate record.

    Returns:
        {title, url, description, rating} with rating coerced to int and
        description defaulting to None. A client-supplied id is never copied.

    Raises:
        ValidationError: the first rule that fails, in the documented order.
    """
    payload = ensure_json_object(payload)

    for field in REQUIRED_FIELDS:
        if _is_missing(payload.get(field)):
            raise ValidationError(
                message=f"Missing {field} in request body",
                field=field,
            )

    title = validate_text("title", payload["title"])
    url = validate_url(payload["url"])
    rating = parse_rating(payload["rating"])

    description = payload.get("description")
    if description is not None:
        description = validate_text("description", description)

    return {
        "title": title,
        "url": url,
        "description": description,
        "rating": rating,
    }


def validate_bookmark_update(payload: Any) -> Dict[str, Any]:
    """
    Validate a partial update and return the merge set.

    Unknown keys are ignored and keys sent as null count as not supplied.

    Raises:
        ValidationError: empty merge set, or a supplied field breaks its rule.
    """
    payload = ensure_json_object(payload)

    changes = {
        field: payload[field]
        for field in UPDATABLE_FIELDS
        if payload.get(field) is not None
    }
    if not changes:
        raise ValidationError(message=EMPTY_UPDATE_MESSAGE)

    if "title" in changes:
        title = validate_text("title", changes["title"])
        if not title.strip():
            raise ValidationError(message="'title' must not be empty", field="title")
    if "url" in changes:
        changes["url"] = validate_url(changes["url"])
    if "description" in changes:
        changes["description"] = validate_text("description", changes["description"])
    if "rating" in changes:
        changes["rating"] = parse_rating(changes["rating"])

    return changes
