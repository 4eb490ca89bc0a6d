"""View models for PnL outputs."""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Optional

from walletpulse.domain.models.market import MarketDataRecord


@dataclass(frozen=True)
class PnLResult:
    """Profit/loss of one token across a set of wallets, in native units."""

    total_tokens_held: float = 0.0
    total_spent_native: float = 0.0
    current_value_native: float = 0.0
    realized_pnl_native: float = 0.0
    unrealized_pnl_native: float = 0.0
    total_pnl_native: float = 0.0

    @classmethod
    def zero(cls) -> "PnLResult":
        return cls()


@dataclass(frozen=True)
class TokenPnL:
    """
    Per-mint record served to dashboard views.

    Combines the market snapshot (when one exists) with the PnL derived from
    the wallets holding the token.
    """

    mint: str
    pnl: PnLResult
    wallet_count: int = 0
    price_usd: Optional[float] = None
    price_native: Optional[float] = None
    liquidity_usd: Optional[float] = None
    volume_24h_usd: Optional[float] = None
    price_change_24h_pct: Optional[float] = None
    pair_id: Optional[str] = None
    venue_id: Optional[str] = None
    observed_at: Optional[datetime] = None

    @property
    def has_price(self) -> bool:
        return bool(self.price_native)

    @classmethod
    def build(
        cls,
        mint: str,
        pnl: PnLResult,
        market: Optional[MarketDataRecord],
        wallet_count: int,
    ) -> "TokenPnL":
        if market is None:
            return cls(mint=mint, pnl=pnl, wallet_count=wallet_count)
        return cls(
            mint=mint,
            pnl=pnl,
            wallet_count=wallet_count,
            price_usd=market.price_usd,
            price_native=market.price_native,
            liquidity_usd=market.liquidity_usd,
            volume_24h_usd=market.volume_24h_usd,
            price_change_24h_pct=market.price_change_24h_pct,
            pair_id=market.pair_id,
            venue_id=market.venue_id,
            observed_at=market.observed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Flatten into the wire shape used by the PnL endpoint."""
        data = {
            "mint": self.mint,
            "has_price": self.has_price,
            "wallet_count": self.wallet_count,
            "price_usd": self.price_usd,
            "price_native": self.price_native,
            "liquidity_usd": self.liquidity_usd,
            "volume_24h_usd": self.volume_24h_usd,
            "price_change_24h_pct": self.price_change_24h_pct,
            "pair_id": self.pair_id,
            "venue_id": self.venue_id,
            "observed_at": self.observed_at.isoformat() if self.observed_at else None,
        }
        data.update(asdict(self.pnl))
        return data
