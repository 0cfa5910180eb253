"""CoinGecko API v3 market data provider."""

from typing import Any, Optional
from urllib.parse import quote

from cryptosim.config.settings import Settings
from cryptosim.providers.http_client import HttpClient

# Default CoinGecko API base URL
DEFAULT_COINGECKO_API_BASE = "https://api.coingecko.com/api/v3"


class CoinGeckoProvider:
    """Fetches raw market, coin and chart payloads from CoinGecko."""

    def __init__(self, http_client: Optional[HttpClient] = None):
        self._http = http_client or HttpClient(DEFAULT_COINGECKO_API_BASE)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CoinGeckoProvider":
        return cls(
            HttpClient(
                base_url=settings.coingecko_api_url,
                timeout=settings.upstream_timeout_seconds,
                max_retries=settings.upstream_max_retries,
                backoff_factor=settings.upstream_backoff_factor,
            )
        )

    def fetch_markets(self, vs_currency: str, per_page: int) -> Any:
        return self._http.get_json(
            "/coins/markets",
            params={
                "vs_currency": vs_currency,
                "order": "market_cap_desc",
                "per_page": per_page,
                "page": 1,
                "sparkline": "false",
            },
        )

    def fetch_coin(self, asset_id: str) -> Any:
        return self._http.get_json(
            f"/coins/{quote(asset_id, safe='')}",
            params={
                "localization": "false",
                "tickers": "false",
                "market_data": "true",
                "community_data": "false",
                "developer_data": "false",
                "sparkline": "false",
            },
        )

    def fetch_market_chart(
        self,
        asset_id: str,
        vs_currency: str,
        days: str,
        interval: Optional[str] = None,
    ) -> Any:
        params = {"vs_currency": vs_currency, "days": days}
        if interval:
            params["interval"] = interval
        return self._http.get_json(
            f"/coins/{quote(asset_id, safe='')}/market_chart",
            params=params,
        )

    def close(self) -> None:
        self._http.close()
