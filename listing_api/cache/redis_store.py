"""Redis cache store implementation."""

import logging
from typing import List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from listing_api.cache.base import CacheStore, is_pattern
from listing_api.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


class RedisCacheStore(CacheStore):
    """Redis-backed cache store.

    Pattern deletion walks the keyspace with ``SCAN MATCH`` and deletes in
    batches. It is not atomic: a key written between the scan and the delete
    can survive, which is the same staleness window a racing read already has.

    Errors are raised as ``StoreError``; there is no fallback to stale data.
    """

    def __init__(self, client: redis.Redis, scan_batch_size: int = 500):
        self._client = client
        self._scan_batch_size = scan_batch_size

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> "RedisCacheStore":
        client = redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            health_check_interval=30
        )
        return cls(client, **kwargs)

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET error for key {key}: {e}")
            raise StoreError("cache") from e

    async def set_with_expiry(self, key: str, ttl_seconds: int, value: str) -> None:
        try:
            await self._client.setex(key, ttl_seconds, value)
        except RedisError as e:
            logger.error(f"Redis SETEX error for key {key}: {e}")
            raise StoreError("cache") from e

    async def delete(self, key_or_pattern: str) -> int:
        try:
            if not is_pattern(key_or_pattern):
                return await self._client.delete(key_or_pattern)
            return await self._delete_matching(key_or_pattern)
        except RedisError as e:
            logger.error(f"Redis DELETE error for {key_or_pattern}: {e}")
            raise StoreError("cache") from e

    async def _delete_matching(self, pattern: str) -> int:
        deleted = 0
        batch: List[str] = []
        async for key in self._client.scan_iter(match=pattern, count=self._scan_batch_size):
            batch.append(key)
            if len(batch) >= self._scan_batch_size:
                deleted += await self._client.delete(*batch)
                batch = []
        if batch:
            deleted += await self._client.delete(*batch)

        logger.info(f"Evicted {deleted} Redis keys matching {pattern}")
        return deleted

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.error(f"Redis PING failed: {e}")
            return False

    async def close(self) -> None:
        await self._client.aclose()
        logger.info("Disconnected from Redis cache")
