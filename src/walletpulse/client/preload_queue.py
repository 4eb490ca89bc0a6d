"""
Fire-and-forget price preloading for the dashboard.

Views call request_preload() as token lists render. Requests are
de-duplicated against everything already queued or in flight, debounced,
and forwarded to the server's /preload-prices endpoint in small batches so
later PnL requests find a warm cache.
"""

import asyncio
import logging
from typing import Iterable, Optional, Protocol

logger = logging.getLogger(__name__)


class PreloadApi(Protocol):
    async def preload_prices(self, mints: Iterable[str]) -> int:
        ...


class PreloadQueue:
    """Debounced, batched preload queue bound to the running event loop."""

    def __init__(
        self,
        api_client: PreloadApi,
        batch_size: int = 10,
        debounce_seconds: float = 0.2,
        batch_delay_seconds: float = 0.1,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._api = api_client
        self._batch_size = batch_size
        self._debounce_seconds = debounce_seconds
        self._batch_delay_seconds = batch_delay_seconds

        # Mints queued or in flight
        self._tracked: set[str] = set()
        self._pending: list[str] = []
        self._processing = False

        self._timer: Optional[asyncio.TimerHandle] = None
        self._drain_task: Optional[asyncio.Task] = None

    def request_preload(self, mints: Iterable[str]) -> None:
        """
        Queue mints for preloading and (re)start the debounce timer.

        Must be called from code running on the event loop.
        """
        added = 0
        for mint in mints:
            if not mint or mint in self._tracked:
                continue
            self._tracked.add(mint)
            self._pending.append(mint)
            added += 1

        if added:
            logger.debug(f"Queued {added} mints for preload ({len(self._pending)} pending)")

        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self._debounce_seconds, self._start_drain)

    def _start_drain(self) -> None:
        self._timer = None
        if self._processing or not self._pending:
            return
        self._processing = True
        self._drain_task = asyncio.get_running_loop().create_task(self._drain())

    async def _drain(self) -> None:
        try:
            while self._pending:
                batch = self._pending[: self._batch_size]
                del self._pending[: self._batch_size]
                try:
                    await self._api.preload_prices(batch)
                    logger.debug(f"Preloaded prices for {len(batch)} mints")
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    logger.warning(f"Price preload failed for {len(batch)} mints: {e}")
                finally:
                    self._tracked.difference_update(batch)

                if self._pending:
                    await asyncio.sleep(self._batch_delay_seconds)
        finally:
            if self._drain_task is asyncio.current_task():
                self._processing = False
                self._drain_task = None

    def get_status(self) -> dict[str, object]:
        return {
            "queue_length": len(self._pending),
            "preloading_count": len(self._tracked),
            "is_processing": self._processing,
        }

    def reset(self) -> None:
        """Cancel the timer and any drain, and forget all queued mints."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._drain_task is not None:
            self._drain_task.cancel()
        self._tracked.clear()
        self._pending.clear()
        self._processing = False

    async def shutdown(self) -> None:
        """Like reset(), but waits for a cancelled drain to finish."""
        task = self._drain_task
        self.reset()
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
