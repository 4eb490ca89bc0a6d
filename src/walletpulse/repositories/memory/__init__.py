"""In-process repository implementations."""

from walletpulse.repositories.memory.cache_store import InMemoryCacheStore

__all__ = [
    "InMemoryCacheStore",
]
