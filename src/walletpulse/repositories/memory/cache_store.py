"""In-process CacheStore for single-instance deployments and tests."""

import time
from typing import Callable, Optional


class InMemoryCacheStore:
    """
    Dict-backed store with per-key expiry.

    Expired keys are dropped lazily on read and by an occasional sweep on
    write. Only safe to share within one event loop.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_every: int = 500):
        self._clock = clock
        self._sweep_every = sweep_every
        self._writes = 0
        # key -> (value, expires_at)
        self._data: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if self._clock() >= expires_at:
            self._data.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._data[key] = (value, self._clock() + ttl_seconds)
        self._writes += 1
        if self._writes % self._sweep_every == 0:
            self._sweep()

    async def close(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def _sweep(self) -> None:
        now = self._clock()
        expired = [k for k, (_, expires_at) in self._data.items() if now >= expires_at]
        for key in expired:
            del self._data[key]
