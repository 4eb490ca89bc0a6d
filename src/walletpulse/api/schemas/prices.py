"""Pydantic schemas for price endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MintListRequest(BaseModel):
    """Request schema carrying a list of token mints."""

    mints: list[str] = Field(default_factory=list, description="Token mint addresses")


class MarketDataResponse(BaseModel):
    """Response schema for one mint's market snapshot."""

    mint: str
    price_usd: float
    price_native: float
    liquidity_usd: float = 0.0
    volume_24h_usd: float = 0.0
    price_change_24h_pct: float = 0.0
    pair_id: Optional[str] = None
    venue_id: Optional[str] = None
    observed_at: datetime


class PriceBatchResponse(BaseModel):
    """Response schema for batch price lookups; unknown mints map to null."""

    results: dict[str, Optional[MarketDataResponse]]


class PreloadResponse(BaseModel):
    """Response schema for accepted preload requests."""

    accepted: int


class NativePriceResponse(BaseModel):
    """Response schema for the SOL/USD oracle status."""

    price_usd: float
    last_updated: Optional[datetime] = None
    source: Optional[str] = None
    refresh_interval_seconds: float
    is_running: bool


class PriceStatsResponse(BaseModel):
    """Response schema for market data cache counters."""

    cache_hits: int
    cache_misses: int
    upstream_calls: int
    upstream_failures: int
    not_found: int
    cache_ttl_seconds: int
    min_request_interval_seconds: float
    chunk_size: int
    chunk_delay_seconds: float
