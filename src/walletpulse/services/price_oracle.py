"""Native (SOL/USD) price oracle with prioritized source fallback."""

import asyncio
import logging
import math
from datetime import datetime
from typing import Any, Optional, Sequence

from walletpulse.core.exceptions import UpstreamUnavailableError
from walletpulse.core.timezone import now_utc
from walletpulse.providers.price_sources import NativePriceSource

logger = logging.getLogger(__name__)

DEFAULT_NATIVE_USD_PRICE = 100.0
DEFAULT_REFRESH_SECONDS = 300.0


def _is_valid_price(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


class PriceOracle:
    """
    Keeps one SOL/USD price fresh from several upstream sources.

    Sources are tried in priority order on every refresh; the first strictly
    positive price wins. When every source fails the previous value is kept,
    so the published price is never zero, negative or missing.
    """

    def __init__(
        self,
        sources: Sequence[NativePriceSource],
        default_price: float = DEFAULT_NATIVE_USD_PRICE,
        refresh_interval_seconds: float = DEFAULT_REFRESH_SECONDS,
    ):
        if not _is_valid_price(default_price):
            raise ValueError(f"default_price must be positive, got {default_price!r}")
        self._sources = list(sources)
        self._price = float(default_price)
        self._refresh_interval = refresh_interval_seconds
        self._last_updated: Optional[datetime] = None
        self._last_source: Optional[str] = None
        self._refreshing = False
        self._task: Optional[asyncio.Task] = None

    def current_native_usd_price(self) -> float:
        """Return the last good SOL price in USD."""
        return self._price

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._last_updated

    @property
    def last_source(self) -> Optional[str]:
        return self._last_source

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> bool:
        """
        Query sources in order and publish the first positive price.

        Returns True when a new price was published. A call made while
        another refresh is in progress returns False immediately.
        """
        if self._refreshing:
            return False

        self._refreshing = True
        try:
            for source in self._sources:
                try:
                    price = await source.fetch_price()
                except UpstreamUnavailableError as e:
                    logger.warning(f"Native price source {source.name} failed: {e.message}")
                    continue
                except Exception:
                    logger.exception(f"Native price source {source.name} raised unexpectedly")
                    continue

                if not _is_valid_price(price):
                    logger.warning(f"Native price source {source.name} returned unusable value {price!r}")
                    continue

                self._price = float(price)
                self._last_updated = now_utc()
                self._last_source = source.name
                logger.info(f"SOL price updated from {source.name}: ${self._price:.2f}")
                return True

            logger.warning(f"All native price sources failed; keeping ${self._price:.2f}")
            return False
        finally:
            self._refreshing = False

    async def start(self) -> None:
        """Refresh once, then keep refreshing in the background."""
        if self.is_running:
            return
        await self.refresh()
        self._task = asyncio.create_task(self._run(), name="native-price-oracle")

    async def stop(self) -> None:
        """Cancel the background refresh loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._refresh_interval)
            await self.refresh()

    def to_usd(self, native_amount: float) -> float:
        return native_amount * self._price

    def to_native(self, usd_amount: float) -> float:
        return usd_amount / self._price

    def unrealized_pnl(
        self,
        token_amount: Optional[float],
        token_price_usd: Optional[float],
        sol_spent: float,
    ) -> float:
        """Current value of a position in SOL minus the SOL spent on it.

        Returns 0 when the amount or the USD price is missing or not positive.
        """
        if not token_amount or not token_price_usd or token_amount <= 0 or token_price_usd <= 0:
            return 0.0
        return self.to_native(token_amount * token_price_usd) - sol_spent

    def get_status(self) -> dict[str, Any]:
        return {
            "price_usd": self._price,
            "last_updated": self._last_updated,
            "source": self._last_source,
            "refresh_interval_seconds": self._refresh_interval,
            "is_running": self.is_running,
        }
