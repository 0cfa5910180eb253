"""Market data gateway endpoints."""

from fastapi import APIRouter, Depends, Query

from cryptosim.api.deps import get_market_data_service
from cryptosim.api.schemas import (
    AssetSummaryResponse,
    AssetDetailResponse,
    PriceHistoryResponse,
    ErrorResponse,
    RateLimitedResponse,
)
from cryptosim.services import MarketDataService

router = APIRouter(
    prefix="/api/crypto",
    tags=["crypto"],
    responses={
        429: {"model": RateLimitedResponse, "description": "Upstream rate limited, nothing cached"},
        500: {"model": ErrorResponse, "description": "Upstream failure"},
    },
)


@router.get("", response_model=list[AssetSummaryResponse])
def list_cryptos(
    service: MarketDataService = Depends(get_market_data_service),
) -> list[AssetSummaryResponse]:
    """Top cryptocurrencies by market cap."""
    return [AssetSummaryResponse.model_validate(asset) for asset in service.get_market_snapshot()]


@router.get("/{asset_id}", response_model=AssetDetailResponse)
def get_crypto(
    asset_id: str,
    service: MarketDataService = Depends(get_market_data_service),
) -> AssetDetailResponse:
    """Detailed market data for one cryptocurrency."""
    return AssetDetailResponse.model_validate(service.get_asset_detail(asset_id))


@router.get("/{asset_id}/history", response_model=PriceHistoryResponse)
def get_price_history(
    asset_id: str,
    days: str = Query("1", description="Number of days of history, or 'max'"),
    service: MarketDataService = Depends(get_market_data_service),
) -> PriceHistoryResponse:
    """Price, market cap and volume series for charting."""
    return PriceHistoryResponse.model_validate(service.get_price_history(asset_id, days))
