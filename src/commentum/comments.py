"""
Comments REST API — /posts, /votes and /reports.
"""

from __future__ import annotations

from typing import AsyncGenerator, Optional

from commentum.models.comment import Comment
from commentum.pagination import PageResult, decode_page, encode_cursor
from commentum.transport.http import HttpClient, RequestDescriptor, extract, parse_model


class CommentsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def create(self, media_id: str, content: str, client: Optional[str] = None) -> Comment:
        """Post a root comment on a media item."""
        data, status = await self._http.request(RequestDescriptor(
            "/posts", method="POST", body={"media_id": media_id, "content": content, "client": client},
        ))
        return parse_model(Comment, extract(data, "post", status), status)

    async def reply(self, parent_id: str, content: str, client: Optional[str] = None) -> Comment:
        """Reply to an existing comment."""
        data, status = await self._http.request(RequestDescriptor(
            "/posts", method="POST", body={"parent_id": parent_id, "content": content, "client": client},
        ))
        return parse_model(Comment, extract(data, "post", status), status)

    async def update(self, comment_id: str, content: str) -> Comment:
        data, status = await self._http.request(RequestDescriptor(
            "/posts", method="PATCH", body={"id": comment_id, "content": content},
        ))
        return parse_model(Comment, extract(data, "post", status), status)

    async def delete(self, comment_id: str) -> None:
        await self._http.send(RequestDescriptor("/posts", method="DELETE", params={"id": comment_id}))

    async def list(self, media_id: str, limit: int = 20, cursor: Optional[str] = None) -> PageResult:
        """Root comments for a media item, newest page first."""
        params = encode_cursor({"media_id": media_id, "limit": limit}, cursor)
        data, status = await self._http.request(RequestDescriptor("/posts", params=params))
        return decode_page(data, "comments", status)

    async def list_replies(
        self,
        root_id: str,
        limit: int = 20,
        cursor: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> PageResult:
        """Replies under a root comment, optionally only direct children of `parent_id`."""
        params = encode_cursor({"root_id": root_id, "limit": limit, "parent_id": parent_id}, cursor)
        data, status = await self._http.request(RequestDescriptor("/posts", params=params))
        return decode_page(data, "replies", status)

    async def iter_comments(self, media_id: str, limit: int = 20) -> AsyncGenerator[Comment, None]:
        """Walk every page of root comments until the server stops returning a cursor."""
        cursor: Optional[str] = None
        while True:
            page = await self.list(media_id, limit=limit, cursor=cursor)
            for comment in page.items:
                yield comment
            if page.next_cursor is None:
                return
            cursor = page.next_cursor

    async def iter_replies(
        self, root_id: str, limit: int = 20, parent_id: Optional[str] = None,
    ) -> AsyncGenerator[Comment, None]:
        cursor: Optional[str] = None
        while True:
            page = await self.list_replies(root_id, limit=limit, cursor=cursor, parent_id=parent_id)
            for comment in page.items:
                yield comment
            if page.next_cursor is None:
                return
            cursor = page.next_cursor

    async def vote(self, comment_id: str, vote_type: int) -> None:
        """Vote 1 (up), -1 (down) or 0 (clear). The value is forwarded unchecked."""
        await self._http.send(RequestDescriptor(
            "/votes", method="POST", body={"post_id": comment_id, "vote_type": vote_type},
        ))

    async def report(self, comment_id: str, reason: str) -> None:
        await self._http.send(RequestDescriptor(
            "/reports", method="POST", body={"post_id": comment_id, "reason": reason},
        ))
