"""Dependency injection for FastAPI."""

from typing import Optional

from cryptosim.config.settings import get_settings
from cryptosim.providers import CoinGeckoProvider
from cryptosim.services import MarketDataService

# The gateway cache must outlive a single request, so one service per process
_provider: Optional[CoinGeckoProvider] = None
_market_data_service: Optional[MarketDataService] = None


def get_market_provider() -> CoinGeckoProvider:
    """Provide the shared CoinGecko provider."""
    global _provider
    if _provider is None:
        _provider = CoinGeckoProvider.from_settings(get_settings())
    return _provider


def get_market_data_service() -> MarketDataService:
    """Provide the process-wide MarketDataService instance."""
    global _market_data_service
    if _market_data_service is None:
        settings = get_settings()
        _market_data_service = MarketDataService(
            provider=get_market_provider(),
            cache_ttl_seconds=settings.market_data_cache_ttl_seconds,
            vs_currency=settings.vs_currency,
            markets_per_page=settings.markets_per_page,
            rate_limit_retry_after=settings.rate_limit_retry_after_seconds,
        )
    return _market_data_service


def reset_market_data_service() -> None:
    """Drop the shared service and close the provider's HTTP session."""
    global _provider, _market_data_service
    if _provider is not None:
        _provider.close()
    _provider = None
    _market_data_service = None
