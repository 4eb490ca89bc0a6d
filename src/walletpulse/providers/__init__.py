"""Market data providers module."""

from walletpulse.providers.market_data_provider import MarketDataProvider
from walletpulse.providers.dexscreener_provider import DexScreenerProvider
from walletpulse.providers.stub_provider import StubMarketDataProvider
from walletpulse.providers.price_sources import (
    NativePriceSource,
    CoinGeckoPriceSource,
    DexScreenerPriceSource,
    JupiterPriceSource,
)

__all__ = [
    "MarketDataProvider",
    "DexScreenerProvider",
    "StubMarketDataProvider",
    "NativePriceSource",
    "CoinGeckoPriceSource",
    "DexScreenerPriceSource",
    "JupiterPriceSource",
]
