"""Market data service: read-through price cache over the upstream market API."""

import asyncio
import json
import logging
import time
from typing import Any, Callable, Iterable, Iterator, Optional

from walletpulse.core.constants import PRICE_KEY_PREFIX
from walletpulse.core.exceptions import UpstreamUnavailableError
from walletpulse.domain.models import MarketDataRecord
from walletpulse.providers.dexscreener_provider import pair_liquidity_usd, record_from_pair
from walletpulse.providers.market_data_provider import MarketDataProvider
from walletpulse.repositories.protocols import CacheStore
from walletpulse.services.price_oracle import PriceOracle

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300
DEFAULT_MIN_REQUEST_INTERVAL_SECONDS = 0.1
DEFAULT_CHUNK_SIZE = 5
DEFAULT_CHUNK_DELAY_SECONDS = 0.2


def chunked(items: list[str], size: int) -> Iterator[list[str]]:
    """Yield consecutive slices of at most size items."""
    for start in range(0, len(items), size):
        yield items[start:start + size]


def select_deepest_pair(pairs: list[dict[str, Any]]) -> dict[str, Any]:
    """Return the pair with the highest USD liquidity; ties keep the first seen."""
    best = pairs[0]
    best_liquidity = pair_liquidity_usd(best)
    for pair in pairs[1:]:
        liquidity = pair_liquidity_usd(pair)
        if liquidity > best_liquidity:
            best, best_liquidity = pair, liquidity
    return best


def cache_key(mint: str) -> str:
    return f"{PRICE_KEY_PREFIX}{mint}"


class MarketDataService:
    """
    Service resolving a mint's market data through the shared cache.

    Cache hits return immediately. Misses go upstream through a process-wide
    gate that keeps calls at least min_request_interval apart. Missing or
    unpriced pairs and upstream failures resolve to None and are never cached.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_store: CacheStore,
        price_oracle: Optional[PriceOracle] = None,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        min_request_interval_seconds: float = DEFAULT_MIN_REQUEST_INTERVAL_SECONDS,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_delay_seconds: float = DEFAULT_CHUNK_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self._provider = provider
        self._cache = cache_store
        self._oracle = price_oracle
        self._cache_ttl = cache_ttl_seconds
        self._min_interval = min_request_interval_seconds
        self._chunk_size = chunk_size
        self._chunk_delay = chunk_delay_seconds
        self._clock = clock
        self._gate = asyncio.Lock()
        self._last_request_at: Optional[float] = None
        self._stats = {
            "cache_hits": 0,
            "cache_misses": 0,
            "upstream_calls": 0,
            "upstream_failures": 0,
            "not_found": 0,
        }

    async def get_market_data(self, mint: str) -> Optional[MarketDataRecord]:
        """
        Return the market snapshot for a mint, or None when it has no priced pair.

        Uses the cached record while it is within TTL; otherwise fetches the
        mint's pairs, keeps the deepest one and caches the result.
        """
        if not mint:
            return None

        key = cache_key(mint)
        cached = await self._cache.get(key)
        if cached is not None:
            record = self._decode(cached)
            if record is not None:
                self._stats["cache_hits"] += 1
                return record

        self._stats["cache_misses"] += 1
        await self._wait_for_upstream_slot()
        self._stats["upstream_calls"] += 1

        try:
            pairs = await self._provider.get_token_pairs(mint)
        except UpstreamUnavailableError as e:
            self._stats["upstream_failures"] += 1
            logger.warning(f"Market data for {mint} unavailable: {e.message}")
            return None

        if not pairs:
            self._stats["not_found"] += 1
            logger.debug(f"No trading pairs for {mint}")
            return None

        native_usd = self._oracle.current_native_usd_price() if self._oracle else None
        record = record_from_pair(mint, select_deepest_pair(pairs), native_usd)
        if not record.has_price:
            self._stats["not_found"] += 1
            logger.debug(f"Deepest pair for {mint} has no usable price")
            return None
        await self._cache.set(key, json.dumps(record.to_dict()), self._cache_ttl)
        return record

    async def get_batch(self, mints: Iterable[str]) -> dict[str, Optional[MarketDataRecord]]:
        """
        Resolve many mints in chunks of bounded concurrency.

        Each chunk runs concurrently; chunks are separated by a fixed delay.
        A failure for one mint resolves to None for that mint only.
        """
        unique = list(dict.fromkeys(m for m in mints if m))
        results: dict[str, Optional[MarketDataRecord]] = {}

        for index, chunk in enumerate(chunked(unique, self._chunk_size)):
            if index > 0 and self._chunk_delay > 0:
                await asyncio.sleep(self._chunk_delay)

            outcomes = await asyncio.gather(
                *(self.get_market_data(mint) for mint in chunk),
                return_exceptions=True,
            )
            for mint, outcome in zip(chunk, outcomes):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                if isinstance(outcome, BaseException):
                    logger.error(f"Unexpected error resolving {mint}: {outcome!r}")
                    results[mint] = None
                else:
                    results[mint] = outcome

        found = sum(1 for record in results.values() if record is not None)
        logger.info(f"Resolved market data for {found}/{len(unique)} mints")
        return results

    def get_stats(self) -> dict[str, Any]:
        """Counters since startup plus the effective limits."""
        return {
            **self._stats,
            "cache_ttl_seconds": self._cache_ttl,
            "min_request_interval_seconds": self._min_interval,
            "chunk_size": self._chunk_size,
            "chunk_delay_seconds": self._chunk_delay,
        }

    async def _wait_for_upstream_slot(self) -> None:
        # Callers queue on the lock and each waits out the remaining interval
        async with self._gate:
            if self._last_request_at is not None:
                wait = self._min_interval - (self._clock() - self._last_request_at)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request_at = self._clock()

    def _decode(self, raw: str) -> Optional[MarketDataRecord]:
        try:
            return MarketDataRecord.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Discarding unreadable cache entry: {e}")
            return None
