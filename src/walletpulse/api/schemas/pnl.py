"""Pydantic schemas for token PnL endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TokenPnLRequest(BaseModel):
    """Request schema for per-token PnL."""

    mints: list[str] = Field(default_factory=list, description="Token mint addresses")
    group_id: Optional[str] = Field(default=None, description="Restrict to one wallet group")


class TokenPnLResponse(BaseModel):
    """Response schema for one token's PnL row."""

    mint: str
    has_price: bool
    wallet_count: int = 0
    price_usd: Optional[float] = None
    price_native: Optional[float] = None
    liquidity_usd: Optional[float] = None
    volume_24h_usd: Optional[float] = None
    price_change_24h_pct: Optional[float] = None
    pair_id: Optional[str] = None
    venue_id: Optional[str] = None
    observed_at: Optional[datetime] = None
    total_tokens_held: float = 0.0
    total_spent_native: float = 0.0
    current_value_native: float = 0.0
    realized_pnl_native: float = 0.0
    unrealized_pnl_native: float = 0.0
    total_pnl_native: float = 0.0


class TokenPnLListResponse(BaseModel):
    """Response schema for the PnL endpoint."""

    success: bool = True
    pnl_data: list[TokenPnLResponse]
