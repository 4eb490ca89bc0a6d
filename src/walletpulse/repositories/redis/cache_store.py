"""Redis-backed CacheStore shared across API instances."""

import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisCacheStore:
    """
    CacheStore over redis.asyncio using GET and SET ... EX.

    A Redis outage degrades to cache misses: reads return None and writes
    are skipped, both logged at WARNING.
    """

    def __init__(self, client: aioredis.Redis):
        self._redis = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCacheStore":
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self._redis.get(key)
        except RedisError as e:
            logger.warning(f"Redis GET {key} failed: {e}")
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.warning(f"Redis SET {key} failed: {e}")

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.warning(f"Redis PING failed: {e}")
            return False

    async def close(self) -> None:
        await self._redis.aclose()
