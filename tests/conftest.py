"""Shared fixtures: a scripted fake Commentum server behind httpx.MockTransport."""

import json
from typing import Any, Optional

import httpx
import pytest

from commentum import AsyncCommentum, CommentumConfig, MemoryTokenStore, Provider

BASE_URL = "https://commentum.test/api"


class FakeServer:
    """Queued responses per (method, path). The last queued response repeats."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[tuple[int, Any, Optional[str], Optional[Exception]]]] = {}

    def reply(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        text: Optional[str] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._routes.setdefault((method, path), []).append((status, json, text, error))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/api"):]
        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"error": f"no route for {request.method} {path}"})
        status, body, text, error = queue.pop(0) if len(queue) > 1 else queue[0]
        if error is not None:
            raise error
        if text is not None:
            return httpx.Response(status, text=text)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, request: Optional[httpx.Request] = None) -> Any:
        return json.loads((request or self.last).content)


class FlakyTokenStore(MemoryTokenStore):
    """MemoryTokenStore that raises for selected operations/providers."""

    def __init__(self, tokens: Optional[dict[Provider, str]] = None):
        super().__init__(tokens)
        self.fail_get: set[Provider] = set()
        self.fail_save = False
        self.fail_delete = False
        self.deleted: list[Provider] = []

    async def get_token(self, provider: Provider) -> Optional[str]:
        if provider in self.fail_get:
            raise RuntimeError(f"keyring locked for {provider.value}")
        return await super().get_token(provider)

    async def save_token(self, provider: Provider, token: str) -> None:
        if self.fail_save:
            raise RuntimeError("disk full")
        await super().save_token(provider, token)

    async def delete_token(self, provider: Provider) -> None:
        self.deleted.append(provider)
        if self.fail_delete:
            raise RuntimeError("disk full")
        await super().delete_token(provider)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def store() -> FlakyTokenStore:
    return FlakyTokenStore()


@pytest.fixture
def config() -> CommentumConfig:
    return CommentumConfig(base_url=BASE_URL)


@pytest.fixture
def client(server: FakeServer, store: FlakyTokenStore, config: CommentumConfig) -> AsyncCommentum:
    return AsyncCommentum(config, storage=store, transport=httpx.MockTransport(server.handler))


@pytest.fixture
def logged_in(client: AsyncCommentum) -> AsyncCommentum:
    """Client with an AniList session already cached and active."""
    client.state.cache(Provider.ANILIST, "jwt-anilist")
    client.state.set_active(Provider.ANILIST)
    return client
