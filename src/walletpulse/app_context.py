"""Application context owning the long-lived price pipeline services.

The oracle, the shared cache store and the market data service are created
once at startup and torn down at shutdown, so background tasks and
connections never outlive the application.
"""

import logging
from typing import Optional, Sequence

import httpx

from walletpulse.config.settings import Settings, get_settings
from walletpulse.providers import (
    CoinGeckoPriceSource,
    DexScreenerPriceSource,
    DexScreenerProvider,
    JupiterPriceSource,
    MarketDataProvider,
    NativePriceSource,
    StubMarketDataProvider,
)
from walletpulse.providers.http import build_http_client
from walletpulse.repositories.memory import InMemoryCacheStore
from walletpulse.repositories.protocols import CacheStore
from walletpulse.repositories.redis import RedisCacheStore
from walletpulse.services import MarketDataService, PriceOracle

logger = logging.getLogger(__name__)


class AppContext:
    """
    Container for the server-side price pipeline.

    Collaborators not passed in are built from settings on start().
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[MarketDataProvider] = None,
        cache_store: Optional[CacheStore] = None,
        price_sources: Optional[Sequence[NativePriceSource]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings
        # Injected collaborators; anything left as None is built on start()
        self._provider_override = provider
        self._cache_store_override = cache_store
        self._price_sources_override = price_sources
        self._http_client_override = http_client

        self._http_client: Optional[httpx.AsyncClient] = None
        self._provider: Optional[MarketDataProvider] = None
        self._cache_store: Optional[CacheStore] = None

        self._price_oracle: Optional[PriceOracle] = None
        self._market_data_service: Optional[MarketDataService] = None
        self._started = False

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    @property
    def is_started(self) -> bool:
        return self._started

    async def start(self) -> None:
        """Build collaborators and start the oracle's refresh loop."""
        if self._started:
            return

        settings = self.settings
        self._http_client = self._http_client_override
        if self._http_client is None:
            self._http_client = build_http_client(settings)
        self._provider = self._provider_override
        if self._provider is None:
            self._provider = self._build_provider(settings)
        self._cache_store = self._cache_store_override
        if self._cache_store is None:
            self._cache_store = self._build_cache_store(settings)
        price_sources = self._price_sources_override
        if price_sources is None:
            price_sources = self._build_price_sources(settings)

        self._price_oracle = PriceOracle(
            sources=price_sources,
            default_price=settings.native_price_default_usd,
            refresh_interval_seconds=settings.native_price_refresh_seconds,
        )
        self._market_data_service = MarketDataService(
            provider=self._provider,
            cache_store=self._cache_store,
            price_oracle=self._price_oracle,
            cache_ttl_seconds=settings.price_cache_ttl_seconds,
            min_request_interval_seconds=settings.upstream_min_interval_seconds,
            chunk_size=settings.batch_chunk_size,
            chunk_delay_seconds=settings.batch_chunk_delay_seconds,
        )

        await self._price_oracle.start()
        self._started = True
        logger.info(
            f"Price pipeline started (provider={settings.market_data_provider}, "
            f"cache={'redis' if settings.redis_url else 'memory'})"
        )

    async def close(self) -> None:
        """Stop background work and release connections."""
        if self._price_oracle is not None:
            await self._price_oracle.stop()
        if self._cache_store is not None:
            await self._cache_store.close()
        if self._http_client is not None and self._http_client_override is None:
            await self._http_client.aclose()
        self._http_client = None
        self._started = False

    @property
    def price_oracle(self) -> PriceOracle:
        """Get the PriceOracle instance."""
        if self._price_oracle is None:
            raise RuntimeError("AppContext.start() has not been called")
        return self._price_oracle

    @property
    def market_data(self) -> MarketDataService:
        """Get the MarketDataService instance."""
        if self._market_data_service is None:
            raise RuntimeError("AppContext.start() has not been called")
        return self._market_data_service

    def _build_provider(self, settings: Settings) -> MarketDataProvider:
        if settings.market_data_provider == "stub":
            return StubMarketDataProvider()
        return DexScreenerProvider(
            client=self._http_client,
            base_url=settings.dexscreener_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )

    @staticmethod
    def _build_cache_store(settings: Settings) -> CacheStore:
        if settings.redis_url:
            return RedisCacheStore.from_url(settings.redis_url)
        return InMemoryCacheStore()

    def _build_price_sources(self, settings: Settings) -> list[NativePriceSource]:
        if settings.market_data_provider == "stub":
            return [DexScreenerPriceSource(self._provider)]
        dexscreener = DexScreenerProvider(
            client=self._http_client,
            base_url=settings.dexscreener_base_url,
            timeout_seconds=settings.http_timeout_seconds,
        )
        # Priority order: CoinGecko, DexScreener, Jupiter
        return [
            CoinGeckoPriceSource(self._http_client, settings.coingecko_price_url),
            DexScreenerPriceSource(dexscreener),
            JupiterPriceSource(self._http_client, settings.jupiter_price_url),
        ]


# Global application context
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear) the global application context."""
    global _app_context
    _app_context = context
