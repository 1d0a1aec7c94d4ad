"""Single-entry in-memory cache slot."""

import logging
from dataclasses import dataclass

from statscache.cache.lock import ReadWriteLock

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 600.0


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached upstream payload.

    Attributes:
        data: Raw upstream response body, passed through untouched
        captured_at: Monotonic clock reading taken when the body was fetched
        content_type: Upstream Content-Type header, if any
    """

    data: bytes
    captured_at: float
    content_type: str | None = None

    def age_seconds(self, now: float) -> float:
        """Get age of entry in seconds at ``now``."""
        return now - self.captured_at


def is_fresh(entry: CacheEntry, now: float, ttl_seconds: float = DEFAULT_TTL_SECONDS) -> bool:
    """Check whether ``entry`` may still be served at ``now``."""
    return entry.age_seconds(now) < ttl_seconds


class CacheSlot:
    """
    Holds zero or one CacheEntry behind a reader/writer lock.

    The slot starts empty and is only ever replaced wholesale; it is never
    cleared. Entries are frozen, so handing the same object to several
    readers is equivalent to handing each a copy.
    """

    def __init__(self) -> None:
        self._entry: CacheEntry | None = None
        self._lock = ReadWriteLock()

    @property
    def lock(self) -> ReadWriteLock:
        """Reader/writer lock guarding the entry."""
        return self._lock

    async def read(self) -> CacheEntry | None:
        """Get the current entry, or None if nothing has been cached yet."""
        async with self._lock.read():
            return self._entry

    async def write(self, entry: CacheEntry) -> None:
        """Replace the held entry unconditionally."""
        async with self._lock.write():
            self._entry = entry
        logger.debug(f"Cache slot replaced ({len(entry.data)} bytes)")

    def peek(self) -> CacheEntry | None:
        """Return the held entry without locking or checking freshness."""
        return self._entry
