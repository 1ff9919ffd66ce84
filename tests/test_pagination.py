"""Page decoding and cursor encoding."""

import pytest
from pydantic import ValidationError

from commentum.errors import MalformedResponseError
from commentum.pagination import PageResult, decode_page, encode_cursor


def test_decode_comments_page():
    page = decode_page({"comments": [{"id": "a"}], "next_cursor": "c1"}, "comments")
    assert [c.id for c in page.items] == ["a"]
    assert page.next_cursor == "c1"
    assert page.has_more
    assert page.count is None


def test_decode_replies_with_count():
    page = decode_page({"replies": [{"id": "r1", "parent_id": "a"}, {"id": "r2"}], "count": 7}, "replies")
    assert [c.id for c in page.items] == ["r1", "r2"]
    assert page.items[0].is_reply
    assert page.count == 7
    assert not page.has_more


def test_decode_missing_or_null_collection():
    assert decode_page({}, "comments").items == []
    assert decode_page({"comments": None}, "comments").items == []
    assert decode_page(None, "comments") == PageResult()


def test_decode_reads_only_requested_key():
    page = decode_page({"replies": [{"id": "r1"}]}, "comments")
    assert page.items == []


def test_decode_coerces_numeric_ids():
    page = decode_page({"comments": [{"id": 42, "user": {"id": 7, "username": "kei"}}]}, "comments")
    assert page.items[0].id == "42"
    assert page.items[0].user.id == "7"


def test_encode_cursor_only_when_given():
    params = {"media_id": "m1", "limit": 20}
    assert encode_cursor(params, None) == {"media_id": "m1", "limit": 20}
    assert encode_cursor(params, "opaque==") == {"media_id": "m1", "limit": 20, "cursor": "opaque=="}
    assert "cursor" not in params


def test_decode_invalid_item_is_malformed():
    with pytest.raises(MalformedResponseError) as exc_info:
        decode_page({"comments": [{"content": "no id"}]}, "comments", status=206)
    assert exc_info.value.status == 206
    assert isinstance(exc_info.value.__cause__, ValidationError)
