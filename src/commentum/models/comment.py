"""
Comment model — the `post` object of /posts responses.

Root comments carry `media_id`; replies carry `parent_id` and `root_id`.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

from commentum.models.user import User

if TYPE_CHECKING:
    from commentum.client import AsyncCommentum


class VoteType(IntEnum):
    DOWN = -1
    NONE = 0
    UP = 1


class Comment(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    content: str = ""
    media_id: Optional[str] = None
    parent_id: Optional[str] = None
    root_id: Optional[str] = None
    user: Optional[User] = None
    upvotes: int = 0
    downvotes: int = 0
    user_vote: Optional[int] = None
    reply_count: int = 0
    is_edited: bool = False
    is_deleted: bool = False
    client: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    async def upvote(self, client: AsyncCommentum) -> None:
        await client.vote_comment(self.id, VoteType.UP)

    async def downvote(self, client: AsyncCommentum) -> None:
        await client.vote_comment(self.id, VoteType.DOWN)

    async def remove_vote(self, client: AsyncCommentum) -> None:
        await client.vote_comment(self.id, VoteType.NONE)

    async def delete(self, client: AsyncCommentum) -> None:
        await client.delete_comment(self.id)

    async def report(self, client: AsyncCommentum, reason: str) -> None:
        await client.report_comment(self.id, reason)
