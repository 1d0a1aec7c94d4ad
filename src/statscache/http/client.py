"""HTTP client for the upstream stats API."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from statscache.errors import BodyReadError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    """Body and content type returned by the upstream API."""

    body: bytes
    content_type: str | None = None


class UpstreamClient:
    """
    Long-lived HTTP client for the one upstream stats query.

    Wraps a single pooled httpx.AsyncClient that is created on first use
    and reused by every request until close(). Failures are mapped to
    TransportError or BodyReadError; nothing is retried.
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        url: str,
        bearer_token: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the upstream client.

        Args:
            url: Fixed upstream URL, including its query string
            bearer_token: Credential sent as ``Authorization: Bearer <token>``
            timeout: Overall budget in seconds for connect plus full response
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self._url = url
        self._timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self._transport = transport
        self._headers = {"Authorization": f"Bearer {bearer_token}"}
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        """Fixed upstream URL this client fetches."""
        return self._url

    @property
    def is_closed(self) -> bool:
        """Whether no open httpx client is held."""
        return self._client is None or self._client.is_closed

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=self._headers,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def fetch(self) -> UpstreamResponse:
        """
        GET the upstream URL and read the whole body.

        The body is returned as raw bytes and the upstream status code is
        not inspected; whatever comes back is passed through.

        Returns:
            UpstreamResponse with the raw body

        Raises:
            TransportError: Connection, DNS or timeout failure
            BodyReadError: The body stream failed partway
        """
        try:
            return await asyncio.wait_for(self._fetch(), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"request to upstream timed out after {self._timeout}s"
            ) from e

    async def _fetch(self) -> UpstreamResponse:
        client = await self._get_client()
        request = client.build_request("GET", self._url)

        try:
            response = await client.send(request, stream=True)
        except httpx.TransportError as e:
            raise TransportError(str(e) or type(e).__name__) from e

        try:
            body = await response.aread()
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise BodyReadError(str(e) or type(e).__name__) from e
        finally:
            await response.aclose()

        logger.debug(f"Upstream returned {response.status_code} ({len(body)} bytes)")
        return UpstreamResponse(
            body=body,
            content_type=response.headers.get("content-type"),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP client closed")

    async def __aenter__(self) -> "UpstreamClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
