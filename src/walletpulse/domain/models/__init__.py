"""Domain models package."""

from walletpulse.domain.models.market import MarketDataRecord, CacheEntry
from walletpulse.domain.models.holding import WalletHolding

__all__ = [
    "MarketDataRecord",
    "CacheEntry",
    "WalletHolding",
]
