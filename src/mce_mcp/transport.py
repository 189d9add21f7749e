"""
HTTP transport used to reach the Marketing Cloud APIs.

Everything above this module talks to the ``HttpClient`` protocol:
``send(method, url, headers, body) -> HttpResponse``. Non-2xx statuses are
returned, never raised; only connection-level failures raise TransportError.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """Decode the body as JSON (raises ValueError when it is not)."""
        return json.loads(self.body)


class HttpClient(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any = None,
    ) -> HttpResponse:
        ...


class HttpxTransport:
    """``HttpClient`` backed by a shared ``httpx.AsyncClient``.

    Dict and list bodies are sent as JSON, strings and bytes as-is.
    ``aclose()`` releases the pooled connections; a later ``send()`` opens
    a fresh client.
    """

    def __init__(self, timeout: float = 30.0, client: Optional[httpx.AsyncClient] = None):
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any = None,
    ) -> HttpResponse:
        kwargs: Dict[str, Any] = {"headers": headers}
        if isinstance(body, (dict, list)):
            kwargs["content"] = json.dumps(body).encode("utf-8")
        elif isinstance(body, (str, bytes)):
            kwargs["content"] = body
        elif body is not None:
            kwargs["content"] = json.dumps(body).encode("utf-8")

        if self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)

        try:
            response = await self._client.request(method.upper(), url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("HTTP %s %s failed: %s", method.upper(), url, e)
            raise TransportError(f"{e.__class__.__name__}: {e}") from e

        return HttpResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )

    async def aclose(self) -> None:
        if not self._client.is_closed:
            logger.debug("Closing HTTP client")
            await self._client.aclose()
