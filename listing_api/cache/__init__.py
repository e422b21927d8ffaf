"""
Cache stores and key derivation for the cache-aside read path.
"""

from listing_api.cache import keys
from listing_api.cache.base import CacheStore, is_pattern
from listing_api.cache.memory_store import InMemoryCacheStore
from listing_api.cache.redis_store import RedisCacheStore
from listing_api.config import Settings
import logging

logger = logging.getLogger(__name__)


def build_cache_store(settings: Settings) -> CacheStore:
    """Create the cache store selected by configuration."""
    if settings.cache_backend == "memory":
        return InMemoryCacheStore()
    return RedisCacheStore.from_url(settings.redis_url)


async def flush_listing_cache(cache: CacheStore) -> int:
    """Evict every listing cache family; returns the number of keys removed."""
    removed = await cache.delete(keys.PROPERTIES_PATTERN)
    removed += await cache.delete(keys.MY_PROPERTIES_PATTERN)
    for key in keys.REFERENCE_KEYS:
        removed += await cache.delete(key)
    logger.info(f"Flushed {removed} listing cache entries")
    return removed


__all__ = [
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "build_cache_store",
    "flush_listing_cache",
    "is_pattern",
]
