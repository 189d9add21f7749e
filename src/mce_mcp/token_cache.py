"""
OAuth2 client-credentials token cache, keyed by Business Unit.

One live token per scope key. A cached token is reused while its
``expires_at`` is strictly in the future; after that the next call fetches
a replacement from the tenant's auth endpoint. Fetches for the same key are
serialized with a per-key lock so concurrent callers share a single request.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .config import Settings
from .errors import AuthRequestError, TransportError
from .transport import HttpClient

logger = logging.getLogger(__name__)

DEFAULT_SCOPE = "default"
EXPIRY_MARGIN_SECONDS = 60


@dataclass(frozen=True)
class TokenInfo:
    access_token: str
    rest_base_url: str
    soap_base_url: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return self.expires_at > now


def _vendor_error_message(response) -> str:
    """Best-effort extraction of the error text from a token endpoint reply."""
    try:
        data = response.json()
    except ValueError:
        return response.body or f"HTTP {response.status}"
    if isinstance(data, dict):
        for key in ("error_description", "message", "error"):
            if data.get(key):
                return str(data[key])
    return response.body


class TokenCache:
    """Per-scope token store with an injectable clock."""

    def __init__(
        self,
        settings: Settings,
        http_client: HttpClient,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings
        self.http_client = http_client
        self.clock = clock
        self._tokens: Dict[str, TokenInfo] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def cached(self, scope_key: Optional[str] = None) -> Optional[TokenInfo]:
        """Return the stored token for a scope, valid or not."""
        return self._tokens.get(scope_key or DEFAULT_SCOPE)

    def invalidate(self, scope_key: Optional[str] = None) -> None:
        self._tokens.pop(scope_key or DEFAULT_SCOPE, None)

    async def get_token(self, scope_key: Optional[str] = None) -> TokenInfo:
        """Return a valid token for ``scope_key``, fetching one if needed.

        Raises:
            AuthConfigError: subdomain, client id or client secret missing
            AuthRequestError: token endpoint unreachable or non-2xx
        """
        key = scope_key or DEFAULT_SCOPE

        token = self._tokens.get(key)
        if token is not None and token.is_valid(self.clock()):
            return token

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have refreshed while we waited.
            token = self._tokens.get(key)
            if token is not None and token.is_valid(self.clock()):
                return token

            token = await self._fetch(scope_key)
            self._tokens[key] = token
            return token

    async def _fetch(self, scope_key: Optional[str]) -> TokenInfo:
        self.settings.require_credentials()

        payload = {
            "grant_type": "client_credentials",
            "client_id": self.settings.client_id,
            "client_secret": self.settings.client_secret,
        }
        if scope_key:
            payload["account_id"] = scope_key

        logger.info("Requesting access token for scope '%s'", scope_key or DEFAULT_SCOPE)
        try:
            response = await self.http_client.send(
                "POST",
                self.settings.token_url,
                {"Content-Type": "application/json"},
                payload,
            )
        except TransportError as e:
            logger.error("Token acquisition failed: %s", e)
            raise AuthRequestError(f"Failed to get access token: {e}") from e

        if not response.ok:
            message = _vendor_error_message(response)
            logger.error("Token acquisition failed (HTTP %s): %s", response.status, message)
            raise AuthRequestError(
                f"Failed to get access token: HTTP {response.status}: {message}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AuthRequestError("Failed to get access token: response is not JSON") from e

        if not isinstance(data, dict) or not data.get("access_token"):
            raise AuthRequestError("Failed to get access token: no access_token in response")

        try:
            expires_in = float(data.get("expires_in") or 0)
        except (TypeError, ValueError):
            expires_in = 0.0

        token = TokenInfo(
            access_token=data["access_token"],
            rest_base_url=data.get("rest_instance_url", ""),
            soap_base_url=data.get("soap_instance_url", ""),
            expires_at=self.clock() + expires_in - EXPIRY_MARGIN_SECONDS,
        )
        logger.info(
            "Token acquired for scope '%s' (token: %s***)",
            scope_key or DEFAULT_SCOPE,
            token.access_token[:6],
        )
        return token
