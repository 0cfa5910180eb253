"""Market data gateway: read-through caching in front of the upstream provider."""

import logging
from datetime import datetime
from typing import Any, Callable, Hashable, TypeVar, Union

from cryptosim.core.exceptions import (
    ValidationError,
    RateLimitedError,
    UpstreamFailureError,
    InvalidUpstreamDataError,
)
from cryptosim.core.timezone import now_utc
from cryptosim.domain.views import AssetSummary, AssetDetail, PriceHistory
from cryptosim.providers.market_data_provider import MarketDataProvider
from cryptosim.repositories.memory import TtlCache
from cryptosim.repositories.protocols import CacheRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

MARKETS_CACHE_KEY = "markets"

# Upstream only accepts an explicit sampling interval for ranges of a week or more
DAILY_INTERVAL_MIN_DAYS = 7

FETCH_CRYPTO_FAILED = "Failed to fetch cryptocurrency data"
FETCH_HISTORY_FAILED = "Failed to fetch price history"
INVALID_HISTORY_DATA = "Invalid data from CoinGecko API"


def normalize_days(days: Union[str, int]) -> str:
    """
    Validate a history range: a positive whole number of days or "max".

    Returns the canonical string form used for both the cache key and the
    upstream request.
    """
    value = str(days).strip().lower()
    if value == "max":
        return value
    if not (value.isascii() and value.isdigit()) or int(value) < 1:
        raise ValidationError(f"days must be a positive integer or 'max', got {days!r}")
    return str(int(value))


class MarketDataService:
    """
    Gateway for market data (snapshot, asset detail, price history).

    Each endpoint has its own TtlCache. A fresh entry is served without
    contacting the provider. When the provider rate-limits, the latest entry
    is served whatever its age; with nothing cached a RateLimitedError is
    raised. Other failures raise UpstreamFailureError and nothing is cached.

    Two concurrent misses on one key may both reach the provider; the last
    response to arrive is the one kept.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: int = 60,
        vs_currency: str = "usd",
        markets_per_page: int = 50,
        rate_limit_retry_after: int = 60,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._provider = provider
        self._vs_currency = vs_currency
        self._markets_per_page = markets_per_page
        self._retry_after = rate_limit_retry_after

        self._markets_cache: TtlCache[str, list[AssetSummary]] = TtlCache(cache_ttl_seconds, clock)
        self._detail_cache: TtlCache[str, AssetDetail] = TtlCache(cache_ttl_seconds, clock)
        self._history_cache: TtlCache[tuple[str, str], PriceHistory] = TtlCache(
            cache_ttl_seconds, clock
        )

    def get_market_snapshot(self) -> list[AssetSummary]:
        """Top assets by market cap, normalized to AssetSummary rows."""
        return self._read_through(
            self._markets_cache,
            MARKETS_CACHE_KEY,
            self._fetch_markets,
            failure_message=FETCH_CRYPTO_FAILED,
        )

    def get_asset_detail(self, asset_id: str) -> AssetDetail:
        """Flattened detail record for one asset."""
        return self._read_through(
            self._detail_cache,
            asset_id,
            lambda: self._fetch_detail(asset_id),
            failure_message=FETCH_CRYPTO_FAILED,
        )

    def get_price_history(self, asset_id: str, days: Union[str, int] = "1") -> PriceHistory:
        """
        Price, market cap and volume series for the last `days`.

        Raises ValidationError for a malformed `days`. An empty or missing
        price series raises InvalidUpstreamDataError and is not cached.
        """
        days = normalize_days(days)
        return self._read_through(
            self._history_cache,
            (asset_id, days),
            lambda: self._fetch_history(asset_id, days),
            failure_message=FETCH_HISTORY_FAILED,
            invalid_message=INVALID_HISTORY_DATA,
            report_details=True,
        )

    def clear_cache(self) -> None:
        caches = (self._markets_cache, self._detail_cache, self._history_cache)
        dropped = sum(len(cache) for cache in caches)
        for cache in caches:
            cache.clear()
        logger.info(f"Cleared {dropped} cached market data entries")

    def _read_through(
        self,
        cache: CacheRepository[Any, T],
        key: Hashable,
        fetch: Callable[[], T],
        failure_message: str,
        invalid_message: str = "",
        report_details: bool = False,
    ) -> T:
        lookup = cache.get(key)
        if lookup.is_fresh:
            logger.info(f"Returning cached data for {key!r}")
            return lookup.value

        try:
            value = fetch()
        except RateLimitedError:
            # Re-read: a concurrent request may have filled the key meanwhile
            fallback = cache.get(key)
            if fallback.has_value:
                logger.warning(f"Rate limited - returning stale cached data for {key!r}")
                return fallback.value
            raise RateLimitedError(retry_after=self._retry_after) from None
        except InvalidUpstreamDataError as e:
            logger.error(f"Invalid upstream data for {key!r}: {e.details or e.message}")
            raise InvalidUpstreamDataError(
                invalid_message or failure_message,
                details=(e.details or e.message) if report_details else None,
            ) from e
        except UpstreamFailureError as e:
            logger.error(f"Error fetching {key!r}: {e.message} {e.details or ''}".rstrip())
            raise UpstreamFailureError(
                failure_message,
                details=e.message if report_details else None,
            ) from e

        cache.put(key, value)
        return value

    def _fetch_markets(self) -> list[AssetSummary]:
        raw = self._provider.fetch_markets(self._vs_currency, self._markets_per_page)
        if not isinstance(raw, list):
            raise InvalidUpstreamDataError("Markets response is not a list")
        try:
            return [AssetSummary.from_coingecko(coin) for coin in raw]
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise InvalidUpstreamDataError("Malformed markets entry", details=repr(e)) from e

    def _fetch_detail(self, asset_id: str) -> AssetDetail:
        raw = self._provider.fetch_coin(asset_id)
        if not isinstance(raw, dict):
            raise InvalidUpstreamDataError(f"Detail response for {asset_id} is not an object")
        try:
            return AssetDetail.from_coingecko(raw)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise InvalidUpstreamDataError(
                f"Malformed detail for {asset_id}", details=repr(e)
            ) from e

    def _fetch_history(self, asset_id: str, days: str) -> PriceHistory:
        interval = "daily" if days.isdigit() and int(days) >= DAILY_INTERVAL_MIN_DAYS else None
        raw = self._provider.fetch_market_chart(asset_id, self._vs_currency, days, interval)
        try:
            history = PriceHistory.from_coingecko(raw)
        except ValueError as e:
            raise InvalidUpstreamDataError(
                f"Invalid price history for {asset_id}", details=str(e)
            ) from e
        logger.info(f"Fetched price history for {asset_id}: {len(history.prices)} prices, days={days}")
        return history
