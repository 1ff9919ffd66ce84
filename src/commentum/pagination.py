"""
Cursor pagination for /posts listings.

The cursor is opaque: it is copied from one response's `next_cursor` into
the next request's `cursor` query parameter and never inspected.
"""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from commentum.errors import MalformedResponseError
from commentum.models.comment import Comment


class PageResult(BaseModel):
    items: list[Comment] = []
    next_cursor: Optional[str] = None
    count: Optional[int] = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def decode_page(data: Any, collection_key: str, status: int = 200) -> PageResult:
    """Read `collection_key` (comments|replies), `next_cursor` and `count` from a page.

    Raises MalformedResponseError, carrying `status`, when an item or field has the wrong shape.
    """
    if not isinstance(data, dict):
        return PageResult()
    try:
        return PageResult(
            items=data.get(collection_key) or [],
            next_cursor=data.get("next_cursor"),
            count=data.get("count"),
        )
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid '{collection_key}' page in response ({e.error_count()} validation errors)", status,
        ) from e


def encode_cursor(params: dict[str, Any], cursor: Optional[str]) -> dict[str, Any]:
    """Return a copy of `params` with `cursor` added when one is supplied."""
    encoded = dict(params)
    if cursor is not None:
        encoded["cursor"] = cursor
    return encoded
