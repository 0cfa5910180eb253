"""Pydantic schemas for API request/response."""

from cryptosim.api.schemas.market import (
    AssetSummaryResponse,
    AssetDetailResponse,
    PriceHistoryResponse,
    ErrorResponse,
    RateLimitedResponse,
)

__all__ = [
    "AssetSummaryResponse",
    "AssetDetailResponse",
    "PriceHistoryResponse",
    "ErrorResponse",
    "RateLimitedResponse",
]
