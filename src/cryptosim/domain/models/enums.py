"""Enumerations for domain models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a simulated trade."""

    BUY = "BUY"
    SELL = "SELL"


class TradeError(str, Enum):
    """Reasons a simulated trade can be rejected."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_PRICE = "INVALID_PRICE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_HOLDINGS = "INSUFFICIENT_HOLDINGS"


class CacheStatus(str, Enum):
    """Freshness of a cache lookup relative to the TTL window."""

    FRESH = "FRESH"
    STALE = "STALE"  # Past TTL, kept as a rate-limit fallback
    MISS = "MISS"
