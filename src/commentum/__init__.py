"""
commentum-client — Commentum SDK for Python.

Comments, replies, votes and reports for anime/manga media, authenticated
through AniList, MyAnimeList or Simkl.
"""

from commentum.client import Commentum, AsyncCommentum
from commentum.config import CommentumConfig, Provider
from commentum.storage import TokenStore, MemoryTokenStore, FileTokenStore
from commentum.pagination import PageResult
from commentum.models.comment import Comment, VoteType
from commentum.models.user import User
from commentum.errors import (
    CommentumError,
    SessionExpiredError,
    ServerError,
    MalformedResponseError,
    TransportError,
    StoreError,
)

__version__ = "0.1.0"
__all__ = [
    "Commentum",
    "AsyncCommentum",
    "CommentumConfig",
    "Provider",
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    "PageResult",
    "Comment",
    "VoteType",
    "User",
    "CommentumError",
    "SessionExpiredError",
    "ServerError",
    "MalformedResponseError",
    "TransportError",
    "StoreError",
]
