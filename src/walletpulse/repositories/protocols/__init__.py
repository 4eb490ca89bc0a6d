"""Repository protocol definitions (interfaces)."""

from walletpulse.repositories.protocols.cache_store import CacheStore
from walletpulse.repositories.protocols.holdings_repo import HoldingsRepository

__all__ = [
    "CacheStore",
    "HoldingsRepository",
]
