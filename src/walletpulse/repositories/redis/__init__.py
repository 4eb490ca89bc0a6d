"""Redis repository implementations."""

from walletpulse.repositories.redis.cache_store import RedisCacheStore

__all__ = [
    "RedisCacheStore",
]
