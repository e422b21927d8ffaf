"""Base interface for cache stores."""

from abc import ABC, abstractmethod
from typing import Optional

GLOB_CHARACTERS = ("*", "?", "[")


def is_pattern(key: str) -> bool:
    """Check whether a key is a glob pattern rather than a literal key."""
    return any(char in key for char in GLOB_CHARACTERS)


class CacheStore(ABC):
    """Key-value store with per-entry expiry.

    Values are opaque strings; callers own serialization. ``delete`` accepts
    either a literal key or a glob pattern (``properties:*``) and evicts
    every matching entry.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent or expired."""
        ...

    @abstractmethod
    async def set_with_expiry(self, key: str, ttl_seconds: int, value: str) -> None:
        """Store a value that expires after ``ttl_seconds``."""
        ...

    @abstractmethod
    async def delete(self, key_or_pattern: str) -> int:
        """Evict a key or every key matching a pattern. Returns the number evicted."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        """Release client resources."""
        return None
