"""Shared cache store protocol."""

from typing import Optional, Protocol


class CacheStore(Protocol):
    """
    Key/value store with per-key expiry, shared by all request handlers.

    get/set must be atomic per key; no extra locking is done by callers.
    """

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when missing or expired."""
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value that expires after ttl_seconds."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
