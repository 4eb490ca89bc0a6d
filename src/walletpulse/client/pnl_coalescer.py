"""
Client-side coalescing of token PnL requests.

Dashboard views re-render often and each render may present a slightly
different token list. TokenPnLCoalescer turns that stream of lists into few
API calls: fresh results are served from a short-lived local cache, changes
are debounced, and a newer request always supersedes an older one.
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Protocol

from walletpulse.core.timezone import now_utc
from walletpulse.domain.models.market import CacheEntry

logger = logging.getLogger(__name__)


class PnLApi(Protocol):
    async def fetch_token_pnl(
        self,
        mints: Iterable[str],
        group_id: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        ...


class TokenPnLCoalescer:
    """
    Debounced, cancellable, cached access to /tokens/pnl for one view.

    Only one request is current at a time. Starting a fetch cancels the
    previous in-flight task, and a generation counter discards any response
    that still arrives for a superseded request.
    """

    MAX_CACHE_ENTRIES = 100

    def __init__(
        self,
        api_client: PnLApi,
        group_id: Optional[str] = None,
        enable_caching: bool = True,
        cache_timeout_seconds: float = 30.0,
        debounce_seconds: float = 0.1,
        max_retries: int = 3,
        retry_base_delay_seconds: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._api = api_client
        self._group_id = group_id
        self._enable_caching = enable_caching
        self._cache_timeout = cache_timeout_seconds
        self._debounce_seconds = debounce_seconds
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay_seconds
        self._clock = clock

        self._tokens: list[str] = []
        self._pnl_data: dict[str, dict[str, Any]] = {}
        self._cache: dict[str, CacheEntry[dict[str, Any]]] = {}
        self._loading = False
        self._error: Optional[str] = None
        self._last_update: Optional[datetime] = None

        self._debounce: Optional[asyncio.TimerHandle] = None
        self._fetch_task: Optional[asyncio.Task] = None
        self._generation = 0

    # -------------------------------------------------------------------------
    # Published state
    # -------------------------------------------------------------------------

    @property
    def pnl_data(self) -> dict[str, dict[str, Any]]:
        return dict(self._pnl_data)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def last_update(self) -> Optional[datetime]:
        return self._last_update

    def get_token_pnl(self, mint: str) -> Optional[dict[str, Any]]:
        return self._pnl_data.get(mint)

    # -------------------------------------------------------------------------
    # Token list changes
    # -------------------------------------------------------------------------

    def update_tokens(self, mints: Iterable[str]) -> None:
        """
        Present a new token list.

        Fresh cached rows are published at once; the rest are fetched after
        the debounce delay. Any request scheduled or in flight for the previous
        list is cancelled. An empty list clears the visible data.
        Must be called from code running on the event loop.
        """
        tokens = list(dict.fromkeys(m for m in mints if m))
        self._tokens = tokens

        # Whatever the previous list scheduled or started is superseded
        self._cancel_pending()
        self._loading = False

        if not tokens:
            self._pnl_data = {}
            self._error = None
            return

        now = self._clock()
        to_fetch = []
        for mint in tokens:
            entry = self._cache.get(mint) if self._enable_caching else None
            if entry is not None and entry.is_valid(self._cache_timeout, now):
                self._pnl_data[mint] = entry.value
            else:
                to_fetch.append(mint)

        if not to_fetch:
            logger.debug(f"All {len(tokens)} tokens served from local PnL cache")
            return

        loop = asyncio.get_running_loop()
        self._debounce = loop.call_later(self._debounce_seconds, self._start_fetch, to_fetch)

    async def refresh(self) -> None:
        """Drop cached rows for the current tokens and refetch them now."""
        if not self._tokens:
            return
        for mint in self._tokens:
            self._cache.pop(mint, None)
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None
        self._start_fetch(list(self._tokens))
        await self.wait_until_idle()

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def _start_fetch(self, mints: list[str]) -> None:
        self._debounce = None
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        self._generation += 1
        self._fetch_task = asyncio.get_running_loop().create_task(
            self._fetch(mints, self._generation)
        )

    async def _fetch(self, mints: list[str], generation: int) -> None:
        self._loading = True
        self._error = None
        attempt = 0
        try:
            while True:
                try:
                    rows = await self._api.fetch_token_pnl(mints, group_id=self._group_id)
                    break
                except Exception as e:
                    if generation != self._generation:
                        return
                    if attempt >= self._max_retries:
                        self._error = str(e)
                        logger.warning(
                            f"PnL request for {len(mints)} tokens failed after "
                            f"{attempt + 1} attempts: {e}"
                        )
                        return
                    delay = self._retry_base_delay * (2 ** attempt)
                    attempt += 1
                    logger.info(
                        f"PnL request failed ({e}); retry {attempt}/{self._max_retries} "
                        f"in {delay:.1f}s"
                    )
                    await asyncio.sleep(delay)

            if generation != self._generation:
                logger.debug("Discarding PnL response for a superseded request")
                return
            self._apply(rows)
        except asyncio.CancelledError:
            logger.debug(f"PnL request for {len(mints)} tokens cancelled")
            raise
        finally:
            if generation == self._generation:
                self._loading = False

    def _apply(self, rows: list[dict[str, Any]]) -> None:
        now = self._clock()
        for row in rows:
            mint = row.get("mint")
            if not mint:
                continue
            self._pnl_data[mint] = row
            if self._enable_caching:
                self._cache[mint] = CacheEntry(value=row, timestamp=now)
        self._last_update = now_utc()
        self._evict(now)

    def _evict(self, now: float) -> None:
        if len(self._cache) <= self.MAX_CACHE_ENTRIES:
            return
        max_age = self._cache_timeout * 2
        stale = [mint for mint, entry in self._cache.items() if entry.age(now) > max_age]
        for mint in stale:
            del self._cache[mint]
        if stale:
            logger.debug(f"Evicted {len(stale)} stale PnL cache entries")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _cancel_pending(self) -> None:
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        # Responses for anything started before now are stale
        self._generation += 1

    async def wait_until_idle(self) -> None:
        """Wait until no debounce timer is pending and no request is in flight."""
        while True:
            if self._debounce is not None:
                await asyncio.sleep(self._debounce_seconds)
                continue
            task = self._fetch_task
            if task is None or task.done():
                return
            await asyncio.wait({task})

    async def close(self) -> None:
        """Cancel timers and in-flight work."""
        task = self._fetch_task
        self._cancel_pending()
        self._loading = False
        if task is not None:
            await asyncio.wait({task})
        self._fetch_task = None

    def get_cache_stats(self) -> dict[str, Any]:
        now = self._clock()
        return {
            "size": len(self._cache),
            "timeout_seconds": self._cache_timeout,
            "entries": [
                {
                    "mint": mint,
                    "age_seconds": entry.age(now),
                    "is_valid": entry.is_valid(self._cache_timeout, now),
                }
                for mint, entry in self._cache.items()
            ],
        }
