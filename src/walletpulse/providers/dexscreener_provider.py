"""DexScreener market data provider."""

import math
from typing import Any, Optional

import httpx

from walletpulse.core.constants import NATIVE_MINT, NATIVE_SYMBOL
from walletpulse.core.timezone import now_utc
from walletpulse.domain.models import MarketDataRecord
from walletpulse.providers.http import get_json

SOURCE_NAME = "dexscreener"


def parse_float(value: Any) -> float:
    """Parse an aggregator number (often a string); bad or missing values become 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def pair_liquidity_usd(pair: dict[str, Any]) -> float:
    return parse_float((pair.get("liquidity") or {}).get("usd"))


def is_native_quoted(pair: dict[str, Any]) -> bool:
    """True when priceNative is denominated in SOL (or the quote is unknown)."""
    quote = pair.get("quoteToken") or {}
    if not quote:
        return True
    if quote.get("address") == NATIVE_MINT:
        return True
    return (quote.get("symbol") or "").upper() in (NATIVE_SYMBOL, "WSOL")


def record_from_pair(
    mint: str,
    pair: dict[str, Any],
    native_usd_price: Optional[float] = None,
) -> MarketDataRecord:
    """
    Build a MarketDataRecord from a DexScreener pair object.

    priceNative is only trusted for SOL-quoted pairs; other pairs get their
    native price from price_usd and the SOL/USD price. When either price
    cannot be determined both are left at zero.
    """
    price_usd = parse_float(pair.get("priceUsd"))
    if is_native_quoted(pair):
        price_native = parse_float(pair.get("priceNative"))
    elif native_usd_price and native_usd_price > 0:
        price_native = price_usd / native_usd_price
    else:
        price_native = 0.0

    if price_usd <= 0 or price_native <= 0:
        price_usd = price_native = 0.0

    return MarketDataRecord(
        mint=mint,
        price_usd=price_usd,
        price_native=price_native,
        liquidity_usd=pair_liquidity_usd(pair),
        volume_24h_usd=parse_float((pair.get("volume") or {}).get("h24")),
        price_change_24h_pct=parse_float((pair.get("priceChange") or {}).get("h24")),
        pair_id=pair.get("pairAddress"),
        venue_id=pair.get("dexId"),
        observed_at=now_utc(),
    )


class DexScreenerProvider:
    """
    Fetches trading pairs for a mint from the DexScreener token endpoint.

    GET {base_url}/tokens/{mint} answers with every pair that involves the
    mint; only pairs where it is the base token are returned.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = "https://api.dexscreener.com/latest/dex",
        timeout_seconds: Optional[float] = None,
    ):
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def get_token_pairs(self, mint: str) -> list[dict[str, Any]]:
        data = await get_json(
            self._client,
            f"{self._base_url}/tokens/{mint}",
            source=SOURCE_NAME,
            timeout=self._timeout,
        )
        pairs = data.get("pairs") if isinstance(data, dict) else None
        if not pairs:
            return []
        return [
            pair
            for pair in pairs
            if isinstance(pair, dict)
            and (pair.get("baseToken") or {}).get("address", mint) == mint
        ]
