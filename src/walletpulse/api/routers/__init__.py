"""API routers package."""

from walletpulse.api.routers.prices import router as prices_router
from walletpulse.api.routers.pnl import router as pnl_router

__all__ = [
    "prices_router",
    "pnl_router",
]
