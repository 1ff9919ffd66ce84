"""
Commentum / AsyncCommentum — main SDK clients.
"""

import asyncio
from typing import Any, AsyncGenerator, Optional

import httpx

from commentum.auth import AuthAPI
from commentum.comments import CommentsAPI
from commentum.config import CommentumConfig, Provider
from commentum.models.comment import Comment
from commentum.models.user import User
from commentum.pagination import PageResult
from commentum.state import SessionState
from commentum.storage import MemoryTokenStore, TokenStore
from commentum.transport.http import HttpClient


class AsyncCommentum:
    """Async Commentum client (primary).

    Call `init()` once after construction to load persisted sessions.
    """

    def __init__(
        self,
        config: CommentumConfig,
        storage: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        state: Optional[SessionState] = None,
    ):
        self.config = config
        self.storage = storage if storage is not None else MemoryTokenStore()
        self.state = state if state is not None else SessionState()

        self.http = HttpClient(config, self.state, self.storage, transport=transport)
        self.auth = AuthAPI(self.http, self.state, self.storage, config)
        self.comments = CommentsAPI(self.http)

    async def __aenter__(self) -> "AsyncCommentum":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    @property
    def active_provider(self) -> Optional[Provider]:
        return self.state.active_provider

    @property
    def is_logged_in(self) -> bool:
        return self.state.is_logged_in

    def set_active_provider(self, provider: Optional[Provider]) -> None:
        """Select whose cached token is sent. Other providers' tokens stay cached."""
        self.state.set_active(provider)

    async def init(self) -> None:
        await self.auth.init()

    async def login(self, provider: Provider, provider_access_token: str) -> None:
        await self.auth.login(provider, provider_access_token)

    async def logout(self, provider: Optional[Provider] = None) -> None:
        await self.auth.logout(provider)

    async def logout_all(self) -> None:
        await self.auth.logout_all()

    async def get_me(self) -> User:
        return await self.auth.get_me()

    async def create_comment(self, media_id: str, content: str, client: Optional[str] = None) -> Comment:
        return await self.comments.create(media_id, content, client=client)

    async def create_reply(self, parent_id: str, content: str, client: Optional[str] = None) -> Comment:
        return await self.comments.reply(parent_id, content, client=client)

    async def update_comment(self, comment_id: str, content: str) -> Comment:
        return await self.comments.update(comment_id, content)

    async def delete_comment(self, comment_id: str) -> None:
        await self.comments.delete(comment_id)

    async def list_comments(self, media_id: str, limit: int = 20, cursor: Optional[str] = None) -> PageResult:
        return await self.comments.list(media_id, limit=limit, cursor=cursor)

    async def list_replies(
        self, root_id: str, limit: int = 20, cursor: Optional[str] = None, parent_id: Optional[str] = None,
    ) -> PageResult:
        return await self.comments.list_replies(root_id, limit=limit, cursor=cursor, parent_id=parent_id)

    async def iter_comments(self, media_id: str, limit: int = 20) -> AsyncGenerator[Comment, None]:
        async for comment in self.comments.iter_comments(media_id, limit=limit):
            yield comment

    async def iter_replies(
        self, root_id: str, limit: int = 20, parent_id: Optional[str] = None,
    ) -> AsyncGenerator[Comment, None]:
        async for comment in self.comments.iter_replies(root_id, limit=limit, parent_id=parent_id):
            yield comment

    async def vote_comment(self, comment_id: str, vote_type: int) -> None:
        await self.comments.vote(comment_id, vote_type)

    async def report_comment(self, comment_id: str, reason: str) -> None:
        await self.comments.report(comment_id, reason)

    async def aclose(self) -> None:
        await self.http.close()


class Commentum:
    """Sync wrapper around AsyncCommentum. Runs the event loop internally."""

    def __init__(self, config: CommentumConfig, **kwargs: Any):
        self._async = AsyncCommentum(config, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def __enter__(self) -> "Commentum":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def auth(self) -> AuthAPI:
        return self._async.auth

    @property
    def comments(self) -> CommentsAPI:
        return self._async.comments

    @property
    def active_provider(self) -> Optional[Provider]:
        return self._async.active_provider

    @property
    def is_logged_in(self) -> bool:
        return self._async.is_logged_in

    def set_active_provider(self, provider: Optional[Provider]) -> None:
        self._async.set_active_provider(provider)

    def init(self) -> None:
        self._run(self._async.init())

    def login(self, provider: Provider, provider_access_token: str) -> None:
        self._run(self._async.login(provider, provider_access_token))

    def logout(self, provider: Optional[Provider] = None) -> None:
        self._run(self._async.logout(provider))

    def logout_all(self) -> None:
        self._run(self._async.logout_all())

    def get_me(self) -> User:
        return self._run(self._async.get_me())

    def create_comment(self, media_id: str, content: str, client: Optional[str] = None) -> Comment:
        return self._run(self._async.create_comment(media_id, content, client=client))

    def create_reply(self, parent_id: str, content: str, client: Optional[str] = None) -> Comment:
        return self._run(self._async.create_reply(parent_id, content, client=client))

    def update_comment(self, comment_id: str, content: str) -> Comment:
        return self._run(self._async.update_comment(comment_id, content))

    def delete_comment(self, comment_id: str) -> None:
        self._run(self._async.delete_comment(comment_id))

    def list_comments(self, media_id: str, limit: int = 20, cursor: Optional[str] = None) -> PageResult:
        return self._run(self._async.list_comments(media_id, limit=limit, cursor=cursor))

    def list_replies(
        self, root_id: str, limit: int = 20, cursor: Optional[str] = None, parent_id: Optional[str] = None,
    ) -> PageResult:
        return self._run(self._async.list_replies(root_id, limit=limit, cursor=cursor, parent_id=parent_id))

    def vote_comment(self, comment_id: str, vote_type: int) -> None:
        self._run(self._async.vote_comment(comment_id, vote_type))

    def report_comment(self, comment_id: str, reason: str) -> None:
        self._run(self._async.report_comment(comment_id, reason))

    def close(self) -> None:
        self._run(self._async.aclose())
        self._loop.close()
