"""
Auth module — provider token exchange, logout and the current user.

A third-party provider access token (from that provider's OAuth flow) is
exchanged for a Commentum session token, which is cached in memory and
persisted through the TokenStore.
"""

import logging
from typing import Optional

from commentum.config import CommentumConfig, Provider
from commentum.errors import StoreError
from commentum.models.user import User
from commentum.state import SessionState
from commentum.storage import TokenStore
from commentum.transport.http import HttpClient, RequestDescriptor, extract, parse_model

logger = logging.getLogger("commentum.auth")


class AuthAPI:
    def __init__(self, http: HttpClient, state: SessionState, store: TokenStore, config: CommentumConfig):
        self._http = http
        self._state = state
        self._store = store
        self._config = config

    async def init(self) -> None:
        """Hydrate cached sessions from the token store. Never raises."""
        await self._state.hydrate(self._store, self._config.providers, self._config.preferred_provider)

    async def login(self, provider: Provider, provider_access_token: str) -> None:
        """Exchange a provider access token for a session token and make `provider` active."""
        data, status = await self._http.request(RequestDescriptor(
            "/auth",
            method="POST",
            body={"provider": provider.value, "access_token": provider_access_token},
            use_auth=False,
        ))
        token = extract(data, "token", status)
        self._state.cache(provider, token)
        self._state.set_active(provider)
        try:
            await self._store.save_token(provider, token)
        except Exception as e:
            raise StoreError(f"Failed to persist token for {provider.value}: {e}") from e

    async def logout(self, provider: Optional[Provider] = None) -> None:
        """Log out `provider` (default: the active one).

        The server-side invalidation is best-effort: any failure of that call
        is discarded so local cleanup always runs. Only a token store failure
        is raised, after memory has been cleared.
        """
        target = provider or self._state.active_provider
        if target is None:
            return

        if self._state.token_for(target) is not None:
            try:
                await self._http.send(RequestDescriptor("/auth", method="DELETE", provider=target))
            except Exception as e:
                # Best-effort: local cleanup below must run whatever the server call did.
                logger.debug("Ignoring server logout failure for %s: %r", target.value, e)

        self._state.invalidate(target)
        try:
            await self._store.delete_token(target)
        except Exception as e:
            raise StoreError(f"Failed to delete token for {target.value}: {e}") from e

    async def logout_all(self) -> None:
        for provider in self._state.cached_providers():
            await self.logout(provider)

    async def get_me(self) -> User:
        data, status = await self._http.request(RequestDescriptor("/me"))
        return parse_model(User, extract(data, "user", status), status)
