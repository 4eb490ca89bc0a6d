"""Dashboard-side helpers for talking to the WalletPulse API."""

from walletpulse.client.api_client import WalletPulseClient
from walletpulse.client.preload_queue import PreloadQueue
from walletpulse.client.pnl_coalescer import TokenPnLCoalescer

__all__ = [
    "WalletPulseClient",
    "PreloadQueue",
    "TokenPnLCoalescer",
]
