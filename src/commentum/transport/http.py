"""
REST HTTP client for Commentum — request dispatch, bearer auth injection,
and response/error normalization.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from commentum.config import CommentumConfig, Provider
from commentum.errors import MalformedResponseError, ServerError, SessionExpiredError, TransportError
from commentum.state import SessionState
from commentum.storage import TokenStore

USER_AGENT = "commentum-client/0.1.0"

# Body keys whose values never reach the logs.
SECRET_KEYS = frozenset({"access_token", "token"})

logger = logging.getLogger("commentum.transport.http")

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class RequestDescriptor:
    path: str
    method: str = "GET"
    body: Optional[dict[str, Any]] = None
    params: Optional[dict[str, Any]] = None
    use_auth: bool = True
    # Authenticate as this provider instead of the active one.
    provider: Optional[Provider] = None


def extract(data: Any, key: str, status: int = 200) -> Any:
    """Pull `key` out of a JSON object response, e.g. `post` or `user`."""
    if not isinstance(data, dict) or data.get(key) is None:
        raise MalformedResponseError(f"Response is missing '{key}'", status)
    return data[key]


def parse_model(model: type[M], data: Any, status: int = 200) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Invalid {model.__name__} in response ({e.error_count()} validation errors)", status,
        ) from e


def redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: ("***" if k in SECRET_KEYS else redact(v)) for k, v in value.items()}
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


class HttpClient:
    def __init__(
        self,
        config: CommentumConfig,
        state: SessionState,
        store: TokenStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._config = config
        self._state = state
        self._store = store
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": USER_AGENT},
            timeout=httpx.Timeout(config.receive_timeout, connect=config.connect_timeout),
            transport=transport,
        )

    def _resolve_auth(self, descriptor: RequestDescriptor) -> tuple[Optional[Provider], Optional[str]]:
        if not descriptor.use_auth:
            return None, None
        if descriptor.provider is not None:
            return descriptor.provider, self._state.token_for(descriptor.provider)
        return self._state.active_token()

    @staticmethod
    def _headers(token: Optional[str]) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def send(self, descriptor: RequestDescriptor) -> Any:
        """Send one request and return the parsed JSON body. Raises CommentumError."""
        data, _ = await self.request(descriptor)
        return data

    async def request(self, descriptor: RequestDescriptor) -> tuple[Any, int]:
        """Like send(), but also returns the HTTP status for shape extraction errors."""
        method = descriptor.method.upper()
        provider, token = self._resolve_auth(descriptor)
        params = {k: v for k, v in (descriptor.params or {}).items() if v is not None}
        content = None
        if descriptor.body is not None and method != "GET":
            content = json.dumps(descriptor.body)

        request = self._client.build_request(
            method, descriptor.path, params=params or None, content=content, headers=self._headers(token),
        )
        self._log_request(request, descriptor.body)

        started = time.monotonic()
        try:
            resp = await self._client.send(request)
        except httpx.HTTPError as e:
            self._log_error(request, e, started)
            raise TransportError(f"Network Error: {str(e) or type(e).__name__}") from e
        except Exception as e:
            self._log_error(request, e, started)
            raise TransportError(f"Unexpected Error: {str(e) or type(e).__name__}") from e
        self._log_response(resp, started)

        # Checked before parsing so auth expiry always surfaces as one error kind.
        if resp.status_code == 401 and descriptor.use_auth and provider is not None:
            await self._expire_session(provider, token)

        data = self._parse(resp)
        if not 200 <= resp.status_code < 300:
            message = data.get("error") if isinstance(data, dict) else None
            if not isinstance(message, str) or not message:
                message = "Unknown Server Error"
            raise ServerError(message, resp.status_code)
        return data, resp.status_code

    async def _expire_session(self, provider: Provider, sent_token: Optional[str]) -> None:
        # A newer login may have replaced the token this request carried; keep that one.
        if not self._state.invalidate(provider, if_token=sent_token):
            logger.info("Stale 401 for %s, keeping the newer session", provider.value)
            raise SessionExpiredError()

        logger.info("Session for %s rejected with 401, clearing token", provider.value)
        store_error: Optional[Exception] = None
        try:
            await self._store.delete_token(provider)
        except Exception as e:
            logger.warning("Token store delete failed for %s: %s", provider.value, e)
            store_error = e
        raise SessionExpiredError() from store_error

    @staticmethod
    def _parse(resp: httpx.Response) -> Any:
        """Decode the body as JSON.

        A zero-length body (204, or an empty 200/4xx/5xx) decodes to None, so an
        empty non-2xx response becomes ServerError("Unknown Server Error"). Any
        non-empty body that is not JSON, whitespace included, is malformed.
        """
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise MalformedResponseError("Invalid JSON response from server", resp.status_code) from e

    def _log_request(self, request: httpx.Request, body: Optional[dict[str, Any]]) -> None:
        if self._config.verbose_logging:
            headers = {k: ("Bearer ***" if k.lower() == "authorization" else v) for k, v in request.headers.items()}
            logger.debug(
                "-> %s %s headers=%s body=%s",
                request.method, request.url, headers, json.dumps(redact(body), indent=2) if body is not None else None,
            )
        elif self._config.enable_logging:
            logger.info("%s %s", request.method, request.url)

    def _log_response(self, resp: httpx.Response, started: float) -> None:
        if not self._config.verbose_logging:
            return
        latency_ms = int((time.monotonic() - started) * 1000)
        try:
            body = json.dumps(redact(resp.json()))
        except ValueError:
            body = "<non-JSON body, %d bytes>" % len(resp.content)
        logger.debug("<- %s [%s] (%dms) %s", resp.request.url, resp.status_code, latency_ms, body[:2000])

    def _log_error(self, request: httpx.Request, error: Exception, started: float) -> None:
        if not self._config.verbose_logging:
            return
        latency_ms = int((time.monotonic() - started) * 1000)
        logger.debug("x- %s %s failed (%dms)", request.method, request.url, latency_ms, exc_info=error)

    async def close(self) -> None:
        await self._client.aclose()
