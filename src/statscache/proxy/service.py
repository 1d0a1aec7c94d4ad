"""
Read-through refresh around the single cache slot.

Serves the cached upstream body while it is fresh and refetches it
otherwise. A stale body is never served, not even when the refetch
fails.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

from statscache.cache.slot import DEFAULT_TTL_SECONDS, CacheEntry, CacheSlot, is_fresh
from statscache.config import API_URL, Settings
from statscache.errors import BodyReadError, FetchError, TransportError
from statscache.http.client import UpstreamClient

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True)
class ProxyResponse:
    """HTTP-shaped result of handling one request."""

    status_code: int
    body: bytes
    content_type: str = DEFAULT_CONTENT_TYPE
    cache_status: str | None = None
    """``HIT`` or ``MISS`` on success, None on error."""

    @property
    def ok(self) -> bool:
        """Whether the request was served successfully."""
        return self.status_code == 200


class StatsProxy:
    """
    Decides per request whether to serve the cached body or refresh it.

    The upstream fetch runs with no lock held, so concurrent requests
    that all find the slot stale each fetch on their own and the last
    one to finish wins the slot.
    """

    def __init__(
        self,
        upstream: UpstreamClient,
        slot: CacheSlot | None = None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the proxy.

        Args:
            upstream: Client for the upstream stats API
            slot: Cache slot to use (a fresh empty one by default)
            ttl_seconds: Maximum age of a servable entry
            clock: Monotonic time source
        """
        self._upstream = upstream
        self._slot = slot or CacheSlot()
        self._ttl = ttl_seconds
        self._clock = clock

    @property
    def slot(self) -> CacheSlot:
        """The cache slot holding the last fetched body."""
        return self._slot

    @property
    def upstream(self) -> UpstreamClient:
        """Client used to refresh the slot."""
        return self._upstream

    @property
    def ttl_seconds(self) -> float:
        """Maximum age in seconds of a servable entry."""
        return self._ttl

    async def handle(self) -> ProxyResponse:
        """Serve one inbound request."""
        entry = await self._slot.read()
        if entry is not None and is_fresh(entry, self._clock(), self._ttl):
            logger.info("Returning cached response")
            return self._ok(entry, "HIT")

        logger.info("Fetching fresh data from API")
        try:
            fetched = await self._upstream.fetch()
        except TransportError as e:
            logger.error(f"Failed to fetch data: {e}")
            return self._error(f"Error fetching data: {e}")
        except BodyReadError as e:
            logger.error(f"Failed to read response body: {e}")
            return self._error(f"Error reading response: {e}")
        except FetchError as e:
            logger.error(f"Upstream fetch failed: {e}")
            return self._error(f"Error fetching data: {e}")

        entry = CacheEntry(
            data=fetched.body,
            captured_at=self._clock(),
            content_type=fetched.content_type,
        )
        await self._slot.write(entry)
        return self._ok(entry, "MISS")

    def _ok(self, entry: CacheEntry, cache_status: str) -> ProxyResponse:
        return ProxyResponse(
            status_code=200,
            body=entry.data,
            content_type=entry.content_type or DEFAULT_CONTENT_TYPE,
            cache_status=cache_status,
        )

    def _error(self, message: str) -> ProxyResponse:
        return ProxyResponse(status_code=500, body=message.encode("utf-8"))

    async def close(self) -> None:
        """Release the upstream connection pool."""
        await self._upstream.close()


def create_proxy(settings: Settings, **kwargs: Any) -> StatsProxy:
    """
    Create the process-wide proxy from settings.

    Args:
        settings: Validated settings (bearer token present)
        **kwargs: Passed to UpstreamClient (e.g. ``transport``)

    Returns:
        StatsProxy with an empty slot
    """
    upstream = UpstreamClient(
        url=API_URL,
        bearer_token=settings.bearer_token or "",
        timeout=settings.upstream_timeout,
        **kwargs,
    )
    return StatsProxy(upstream=upstream, ttl_seconds=settings.cache_ttl_seconds)
