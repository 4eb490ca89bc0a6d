"""Core utilities and shared functionality."""

from walletpulse.core.timezone import (
    now_utc,
    to_utc,
    UTC,
)
from walletpulse.core.exceptions import (
    AppError,
    ValidationError,
    UpstreamUnavailableError,
    ApiRequestError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "UpstreamUnavailableError",
    "ApiRequestError",
]
