"""Market data provider protocol."""

from typing import Any, Protocol


class MarketDataProvider(Protocol):
    """
    Protocol for upstream market data providers.

    Implementations return the raw trading-pair objects an aggregator knows
    for a mint, in the aggregator's order. An empty list means no pair exists.
    Failures are raised as UpstreamUnavailableError; providers never cache.
    """

    async def get_token_pairs(self, mint: str) -> list[dict[str, Any]]:
        """Return the trading pairs whose base token is the given mint."""
        ...
