"""Repository layer - data access abstractions and implementations."""

from walletpulse.repositories.protocols import (
    CacheStore,
    HoldingsRepository,
)

__all__ = [
    "CacheStore",
    "HoldingsRepository",
]
