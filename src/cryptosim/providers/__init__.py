"""Market data providers module."""

from cryptosim.providers.market_data_provider import MarketDataProvider
from cryptosim.providers.http_client import HttpClient
from cryptosim.providers.coingecko_provider import CoinGeckoProvider

__all__ = [
    "MarketDataProvider",
    "HttpClient",
    "CoinGeckoProvider",
]
