"""
Client configuration and identity providers.
"""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class Provider(str, Enum):
    """Identity backends. The value is the wire identifier sent to /auth."""

    ANILIST = "anilist"
    MYANIMELIST = "mal"
    SIMKL = "simkl"

    @classmethod
    def parse(cls, text: str) -> "Provider":
        """Accept the wire value or the member name, case-insensitive."""
        key = text.strip().lower()
        for provider in cls:
            if key in (provider.value, provider.name.lower()):
                return provider
        raise ValueError(f"Unknown provider: {text!r}")


class CommentumConfig(BaseModel):
    base_url: str
    connect_timeout: float = 10.0
    receive_timeout: float = 10.0
    enable_logging: bool = False
    verbose_logging: bool = False
    preferred_provider: Provider = Provider.ANILIST
    providers: list[Provider] = list(Provider)

    @field_validator("base_url")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_env(cls, base_url: Optional[str] = None) -> "CommentumConfig":
        """Build a config from COMMENTUM_BASE_URL, COMMENTUM_PROVIDER and COMMENTUM_LOG."""
        url = base_url or os.environ.get("COMMENTUM_BASE_URL")
        if not url:
            raise ValueError("base_url required (set COMMENTUM_BASE_URL)")
        log = os.environ.get("COMMENTUM_LOG", "").lower()
        provider = os.environ.get("COMMENTUM_PROVIDER")
        return cls(
            base_url=url,
            enable_logging=log in ("1", "true", "verbose"),
            verbose_logging=log == "verbose",
            preferred_provider=Provider.parse(provider) if provider else Provider.ANILIST,
        )
