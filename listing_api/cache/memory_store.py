"""In-memory cache store for local development and tests."""

import fnmatch
import time
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from listing_api.cache.base import CacheStore, is_pattern

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cache entry with an absolute expiration time."""

    value: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class InMemoryCacheStore(CacheStore):
    """Process-local cache that mimics Redis expiry and pattern deletion.

    Args:
        clock: Time source in seconds; injectable so tests can advance time.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._storage: Dict[str, CacheEntry] = {}
        self._clock = clock

    async def get(self, key: str) -> Optional[str]:
        entry = self._storage.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._storage[key]
            return None
        return entry.value

    async def set_with_expiry(self, key: str, ttl_seconds: int, value: str) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._storage[key] = CacheEntry(value=value, expires_at=now + ttl_seconds)

    def _purge_expired(self, now: float) -> None:
        # Expired entries that are never read again are only reclaimed here
        expired = [key for key, entry in self._storage.items() if entry.is_expired(now)]
        for key in expired:
            del self._storage[key]

    async def delete(self, key_or_pattern: str) -> int:
        if not is_pattern(key_or_pattern):
            return 1 if self._storage.pop(key_or_pattern, None) is not None else 0

        matched = [key for key in self._storage if fnmatch.fnmatchcase(key, key_or_pattern)]
        for key in matched:
            del self._storage[key]
        logger.debug(f"Evicted {len(matched)} in-memory keys matching {key_or_pattern}")
        return len(matched)

    async def ping(self) -> bool:
        return True

    def keys(self):
        """Return the live (unexpired) keys."""
        now = self._clock()
        return [key for key, entry in self._storage.items() if not entry.is_expired(now)]
