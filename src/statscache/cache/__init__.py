"""
Cache module for the single upstream response.

Provides the one-entry cache slot and the reader/writer lock that
guards it.
"""

from statscache.cache.lock import ReadWriteLock
from statscache.cache.slot import DEFAULT_TTL_SECONDS, CacheEntry, CacheSlot, is_fresh

__all__ = [
    "CacheEntry",
    "CacheSlot",
    "DEFAULT_TTL_SECONDS",
    "ReadWriteLock",
    "is_fresh",
]
