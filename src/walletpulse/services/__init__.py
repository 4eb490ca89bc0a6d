"""Service layer - price, cache and PnL orchestration."""

from walletpulse.services.price_oracle import PriceOracle
from walletpulse.services.market_data_service import MarketDataService
from walletpulse.services.pnl_calculator import compute_token_metrics
from walletpulse.services.pnl_service import PnLService

__all__ = [
    "PriceOracle",
    "MarketDataService",
    "compute_token_metrics",
    "PnLService",
]
