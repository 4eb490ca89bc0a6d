"""View models for service outputs."""

from walletpulse.domain.views.pnl import PnLResult, TokenPnL

__all__ = [
    "PnLResult",
    "TokenPnL",
]
