"""Stub market data provider for offline/testing use."""

from typing import Any, Optional

from walletpulse.core.constants import NATIVE_MINT


_SOL_QUOTE = {"address": NATIVE_MINT, "symbol": "SOL"}
_USDC_QUOTE = {"address": "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v", "symbol": "USDC"}

# Deterministic pairs for a few well-known mints: (dex, pair, price_usd, price_native, liquidity)
_STUB_PAIRS: dict[str, list[tuple[str, str, str, str, float]]] = {
    NATIVE_MINT: [
        ("raydium", "StubSolUsdcRaydium", "150.00", "150.00", 25_000_000.0),
        ("orca", "StubSolUsdcOrca", "149.90", "149.90", 12_000_000.0),
    ],
    # BONK
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": [
        ("raydium", "StubBonkSolRaydium", "0.0000225", "0.00000015", 4_500_000.0),
        ("meteora", "StubBonkSolMeteora", "0.0000224", "0.000000149", 900_000.0),
    ],
    # WIF
    "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm": [
        ("orca", "StubWifSolOrca", "1.80", "0.012", 7_200_000.0),
    ],
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic DexScreener-shaped pairs.

    Unknown mints have no pairs, which the cache service reports as not found.
    """

    def __init__(self, pairs: Optional[dict[str, list[tuple[str, str, str, str, float]]]] = None):
        self._pairs = pairs if pairs is not None else _STUB_PAIRS

    async def get_token_pairs(self, mint: str) -> list[dict[str, Any]]:
        """Return stub pairs for the mint (SOL itself is quoted in USDC)."""
        quote = _USDC_QUOTE if mint == NATIVE_MINT else _SOL_QUOTE
        result = []
        for dex_id, pair_address, price_usd, price_native, liquidity in self._pairs.get(mint, []):
            result.append(
                {
                    "chainId": "solana",
                    "dexId": dex_id,
                    "pairAddress": pair_address,
                    "baseToken": {"address": mint},
                    "quoteToken": quote,
                    "priceUsd": price_usd,
                    "priceNative": price_native,
                    "liquidity": {"usd": liquidity},
                    "volume": {"h24": liquidity / 10},
                    "priceChange": {"h24": 0.0},
                }
            )
        return result
