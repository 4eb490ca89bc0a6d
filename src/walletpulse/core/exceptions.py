"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class UpstreamUnavailableError(AppError):
    """Raised when an upstream price source or market API cannot be used.

    Covers transport failures, timeouts, non-2xx responses and unparseable
    bodies. Callers in the price pipeline recover from it locally.
    """

    def __init__(self, source: str, detail: str):
        self.source = source
        super().__init__(f"{source} unavailable: {detail}", code="UPSTREAM_UNAVAILABLE")


class ApiRequestError(AppError):
    """Raised by the HTTP client when a WalletPulse API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, code="API_REQUEST_FAILED")
