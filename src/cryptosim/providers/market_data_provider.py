"""Market data provider protocol."""

from typing import Any, Optional, Protocol


class MarketDataProvider(Protocol):
    """
    Protocol for upstream market data sources.

    Methods return the provider's raw JSON. Implementations raise
    RateLimitedError when the provider throttles, UpstreamFailureError on any
    other transport or HTTP failure, and InvalidUpstreamDataError when the
    body cannot be decoded.
    """

    def fetch_markets(self, vs_currency: str, per_page: int) -> Any:
        """Fetch the top `per_page` assets ordered by market cap."""
        ...

    def fetch_coin(self, asset_id: str) -> Any:
        """Fetch detail (including market data) for one asset."""
        ...

    def fetch_market_chart(
        self,
        asset_id: str,
        vs_currency: str,
        days: str,
        interval: Optional[str] = None,
    ) -> Any:
        """Fetch price, market cap and volume series for the last `days`."""
        ...
