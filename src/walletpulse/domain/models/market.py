"""Market data models for token prices."""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from walletpulse.core.timezone import now_utc, to_utc

T = TypeVar("T")


@dataclass(frozen=True)
class MarketDataRecord:
    """
    Latest known market snapshot for one token mint.

    Built from the deepest trading pair for the mint. A mint without any
    trading pair has no record at all; it is never represented as a
    zero-priced record.
    """

    mint: str
    price_usd: float
    price_native: float
    liquidity_usd: float = 0.0
    volume_24h_usd: float = 0.0
    price_change_24h_pct: float = 0.0
    pair_id: Optional[str] = None
    venue_id: Optional[str] = None
    observed_at: datetime = field(default_factory=now_utc)

    @property
    def has_price(self) -> bool:
        return self.price_native > 0 and self.price_usd > 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "mint": self.mint,
            "price_usd": self.price_usd,
            "price_native": self.price_native,
            "liquidity_usd": self.liquidity_usd,
            "volume_24h_usd": self.volume_24h_usd,
            "price_change_24h_pct": self.price_change_24h_pct,
            "pair_id": self.pair_id,
            "venue_id": self.venue_id,
            "observed_at": self.observed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MarketDataRecord":
        """Rebuild a record from to_dict() output."""
        observed_at = data.get("observed_at")
        return cls(
            mint=data["mint"],
            price_usd=float(data.get("price_usd") or 0.0),
            price_native=float(data.get("price_native") or 0.0),
            liquidity_usd=float(data.get("liquidity_usd") or 0.0),
            volume_24h_usd=float(data.get("volume_24h_usd") or 0.0),
            price_change_24h_pct=float(data.get("price_change_24h_pct") or 0.0),
            pair_id=data.get("pair_id"),
            venue_id=data.get("venue_id"),
            observed_at=to_utc(datetime.fromisoformat(observed_at)) if observed_at else now_utc(),
        )


@dataclass
class CacheEntry(Generic[T]):
    """
    A cached value with the monotonic time it was stored.

    Expired entries are logically absent even while still held in memory.
    """

    value: T
    timestamp: float = field(default_factory=time.monotonic)

    def age(self, now: Optional[float] = None) -> float:
        current = time.monotonic() if now is None else now
        return current - self.timestamp

    def is_valid(self, ttl_seconds: float, now: Optional[float] = None) -> bool:
        """Return True while the entry is younger than the TTL."""
        return self.age(now) < ttl_seconds
