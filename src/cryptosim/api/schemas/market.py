"""Pydantic schemas for market data endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class AssetSummaryResponse(BaseModel):
    """Response schema for one row of the market snapshot."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    name: str
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    total_volume: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    image: Optional[str] = None


class AssetDetailResponse(BaseModel):
    """Response schema for a single asset's detail."""

    model_config = {"from_attributes": True}

    id: str
    symbol: str
    name: str
    current_price: float = 0
    market_cap: float = 0
    total_volume: float = 0
    price_change_percentage_24h: float = 0
    price_change_24h: float = 0
    image: str = ""
    description: str = ""
    links: dict[str, Any] = Field(default_factory=dict)


class PriceHistoryResponse(BaseModel):
    """Response schema for price history series of [epoch_millis, value] pairs."""

    model_config = {"from_attributes": True}

    prices: list[list[Optional[float]]]
    market_caps: list[list[Optional[float]]] = Field(default_factory=list)
    total_volumes: list[list[Optional[float]]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Error body for upstream failures."""

    error: str
    details: Optional[str] = None


class RateLimitedResponse(BaseModel):
    """Error body returned while the upstream is rate limiting."""

    error: str
    retryAfter: int
