"""WalletPulse: token price caching, request coalescing and wallet PnL."""

__version__ = "0.1.0"
