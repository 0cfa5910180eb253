"""Core utilities and shared functionality."""

from cryptosim.core.timezone import now_utc, UTC_TZ
from cryptosim.core.exceptions import (
    AppError,
    ValidationError,
    InvalidAmountError,
    InvalidPriceError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    RateLimitedError,
    UpstreamFailureError,
    InvalidUpstreamDataError,
)

__all__ = [
    "now_utc",
    "UTC_TZ",
    "AppError",
    "ValidationError",
    "InvalidAmountError",
    "InvalidPriceError",
    "InsufficientFundsError",
    "InsufficientHoldingsError",
    "RateLimitedError",
    "UpstreamFailureError",
    "InvalidUpstreamDataError",
]
