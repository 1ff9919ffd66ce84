"""
In-memory session state: cached session tokens per provider plus the active
provider pointer.
"""

import logging
import threading
from typing import Any, Iterable, Optional

from commentum.config import Provider
from commentum.storage import TokenStore

logger = logging.getLogger("commentum.state")

_ANY = object()


class SessionState:
    """Provider -> token cache. The active provider may be set without a token."""

    def __init__(self, tokens: Optional[dict[Provider, str]] = None, active: Optional[Provider] = None):
        self._lock = threading.Lock()
        self._tokens: dict[Provider, str] = dict(tokens or {})
        self._active = active

    async def hydrate(
        self,
        store: TokenStore,
        providers: Iterable[Provider],
        preferred: Optional[Provider] = None,
    ) -> None:
        """Load persisted tokens. A failing read only skips that provider."""
        for provider in providers:
            try:
                token = await store.get_token(provider)
            except Exception as e:
                logger.warning("Token store read failed for %s: %s", provider.value, e)
                continue
            if token:
                self.cache(provider, token)
        with self._lock:
            if preferred is not None and preferred in self._tokens:
                self._active = preferred

    @property
    def active_provider(self) -> Optional[Provider]:
        return self._active

    def set_active(self, provider: Optional[Provider]) -> None:
        with self._lock:
            self._active = provider

    def cache(self, provider: Provider, token: str) -> None:
        with self._lock:
            self._tokens[provider] = token

    def invalidate(self, provider: Provider, if_token: Any = _ANY) -> bool:
        """Drop the cached token; clears the active pointer if it was this provider.

        With `if_token`, only invalidates while the cached token (None when
        absent) still equals it, and returns whether anything was invalidated.
        """
        with self._lock:
            if if_token is not _ANY and self._tokens.get(provider) != if_token:
                return False
            self._tokens.pop(provider, None)
            if self._active == provider:
                self._active = None
            return True

    def token_for(self, provider: Optional[Provider]) -> Optional[str]:
        if provider is None:
            return None
        with self._lock:
            return self._tokens.get(provider)

    def active_token(self) -> tuple[Optional[Provider], Optional[str]]:
        with self._lock:
            if self._active is None:
                return None, None
            return self._active, self._tokens.get(self._active)

    def cached_providers(self) -> list[Provider]:
        with self._lock:
            return list(self._tokens)

    @property
    def is_logged_in(self) -> bool:
        with self._lock:
            return self._active is not None and self._active in self._tokens
