"""Domain layer - market, holding and PnL models."""

from walletpulse.domain.models import MarketDataRecord, CacheEntry, WalletHolding
from walletpulse.domain.views import PnLResult, TokenPnL

__all__ = [
    "MarketDataRecord",
    "CacheEntry",
    "WalletHolding",
    "PnLResult",
    "TokenPnL",
]
