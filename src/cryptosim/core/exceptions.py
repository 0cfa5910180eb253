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


# Ledger errors: converted to failed TradeResults, never surfaced as exceptions.


class InvalidAmountError(AppError):
    """Raised when a trade amount is not a positive number."""

    def __init__(self, message: str = "Amount must be greater than 0."):
        super().__init__(message, code="INVALID_AMOUNT")


class InvalidPriceError(AppError):
    """Raised when a trade price is not a positive number."""

    def __init__(self, message: str = "Price must be greater than 0."):
        super().__init__(message, code="INVALID_PRICE")


class InsufficientFundsError(AppError):
    """Raised when attempting to spend more cash than available."""

    def __init__(self, available: str):
        super().__init__(
            f"Insufficient funds. You have ${available} available.",
            code="INSUFFICIENT_FUNDS",
        )


class InsufficientHoldingsError(AppError):
    """Raised when attempting to sell more units than owned."""

    def __init__(self, asset_id: str, available: str):
        super().__init__(
            f"Insufficient {asset_id.upper()}. You have {available} available.",
            code="INSUFFICIENT_HOLDINGS",
        )


# Gateway errors: mapped to JSON error responses by the API layer.


class RateLimitedError(AppError):
    """Raised when the upstream provider is rate limiting and no cache exists."""

    def __init__(
        self,
        retry_after: int = 60,
        message: str = "API rate limit exceeded. Please wait a moment and try again.",
    ):
        self.retry_after = retry_after
        super().__init__(message, code="RATE_LIMITED")


class UpstreamFailureError(AppError):
    """Raised when the upstream provider fails for any reason other than rate limiting."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.details = details
        super().__init__(message, code="UPSTREAM_FAILURE")


class InvalidUpstreamDataError(AppError):
    """Raised when the upstream provider answers with malformed or empty data."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.details = details
        super().__init__(message, code="INVALID_UPSTREAM_DATA")
