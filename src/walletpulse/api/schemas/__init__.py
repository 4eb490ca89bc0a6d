"""Pydantic schemas for API request/response."""

from walletpulse.api.schemas.prices import (
    MintListRequest,
    MarketDataResponse,
    PriceBatchResponse,
    PreloadResponse,
    NativePriceResponse,
    PriceStatsResponse,
)
from walletpulse.api.schemas.pnl import (
    TokenPnLRequest,
    TokenPnLResponse,
    TokenPnLListResponse,
)

__all__ = [
    "MintListRequest",
    "MarketDataResponse",
    "PriceBatchResponse",
    "PreloadResponse",
    "NativePriceResponse",
    "PriceStatsResponse",
    "TokenPnLRequest",
    "TokenPnLResponse",
    "TokenPnLListResponse",
]
