"""
Upstream sources for the native (SOL) price in USD.

Each source answers with a single number in its own response shape. A source
returns None when the response carries no usable price and raises
UpstreamUnavailableError when the request itself fails.
"""

from typing import Any, Optional, Protocol

import httpx

from walletpulse.core.constants import NATIVE_MINT
from walletpulse.providers.dexscreener_provider import (
    pair_liquidity_usd,
    parse_float,
)
from walletpulse.providers.http import get_json
from walletpulse.providers.market_data_provider import MarketDataProvider


class NativePriceSource(Protocol):
    """A single upstream quoting SOL in USD."""

    name: str

    async def fetch_price(self) -> Optional[float]:
        ...


class CoinGeckoPriceSource:
    """CoinGecko simple price endpoint: {"solana": {"usd": 142.1}}."""

    name = "coingecko"

    def __init__(self, client: httpx.AsyncClient, url: str):
        self._client = client
        self._url = url

    async def fetch_price(self) -> Optional[float]:
        data = await get_json(
            self._client,
            self._url,
            source=self.name,
            params={"ids": "solana", "vs_currencies": "usd"},
        )
        if not isinstance(data, dict):
            return None
        price = parse_float((data.get("solana") or {}).get("usd"))
        return price or None


class DexScreenerPriceSource:
    """SOL price from its deepest DexScreener pair."""

    name = "dexscreener"

    def __init__(self, provider: MarketDataProvider):
        self._provider = provider

    async def fetch_price(self) -> Optional[float]:
        pairs = await self._provider.get_token_pairs(NATIVE_MINT)
        if not pairs:
            return None
        best = max(pairs, key=pair_liquidity_usd)
        price = parse_float(best.get("priceUsd"))
        return price or None


class JupiterPriceSource:
    """Jupiter price API: {"data": {"<mint>": {"price": "142.1"}}}."""

    name = "jupiter"

    def __init__(self, client: httpx.AsyncClient, url: str):
        self._client = client
        self._url = url

    async def fetch_price(self) -> Optional[float]:
        data: Any = await get_json(
            self._client,
            self._url,
            source=self.name,
            params={"ids": NATIVE_MINT},
        )
        if not isinstance(data, dict):
            return None
        entry = (data.get("data") or {}).get(NATIVE_MINT) or {}
        price = parse_float(entry.get("price"))
        return price or None
