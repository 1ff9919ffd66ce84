"""
Durable token storage.

The client only talks to the TokenStore interface; where tokens actually
live (keyring, encrypted file, database) is up to the embedding application.
"""

import abc
import asyncio
import json
from pathlib import Path
from typing import Optional

from commentum.config import Provider

DEFAULT_TOKEN_FILE = Path.home() / ".commentum" / "tokens.json"


class TokenStore(abc.ABC):
    @abc.abstractmethod
    async def save_token(self, provider: Provider, token: str) -> None: ...

    @abc.abstractmethod
    async def get_token(self, provider: Provider) -> Optional[str]: ...

    @abc.abstractmethod
    async def delete_token(self, provider: Provider) -> None: ...

    async def clear_all(self) -> None:
        for provider in Provider:
            await self.delete_token(provider)


class MemoryTokenStore(TokenStore):
    """Process-local store. Useful for tests and short-lived scripts."""

    def __init__(self, tokens: Optional[dict[Provider, str]] = None):
        self.tokens: dict[Provider, str] = dict(tokens or {})

    async def save_token(self, provider: Provider, token: str) -> None:
        self.tokens[provider] = token

    async def get_token(self, provider: Provider) -> Optional[str]:
        return self.tokens.get(provider)

    async def delete_token(self, provider: Provider) -> None:
        self.tokens.pop(provider, None)

    async def clear_all(self) -> None:
        self.tokens.clear()


class FileTokenStore(TokenStore):
    """JSON file keyed by provider wire value, e.g. ~/.commentum/tokens.json."""

    def __init__(self, path: Path = DEFAULT_TOKEN_FILE):
        self._path = Path(path)
        self._lock = asyncio.Lock()

    def _read(self) -> dict[str, str]:
        try:
            return json.loads(self._path.read_text())
        except FileNotFoundError:
            return {}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2))
        self._path.chmod(0o600)

    async def save_token(self, provider: Provider, token: str) -> None:
        async with self._lock:
            data = self._read()
            data[provider.value] = token
            self._write(data)

    async def get_token(self, provider: Provider) -> Optional[str]:
        return self._read().get(provider.value)

    async def delete_token(self, provider: Provider) -> None:
        async with self._lock:
            data = self._read()
            if data.pop(provider.value, None) is not None:
                self._write(data)

    async def clear_all(self) -> None:
        async with self._lock:
            self._path.unlink(missing_ok=True)
