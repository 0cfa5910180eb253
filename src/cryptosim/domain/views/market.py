"""View models for normalized market data returned by the gateway.

Each `from_coingecko` constructor raises ValueError (or KeyError for a
missing id) when the payload has the wrong shape, so that malformed upstream
data is reported before it can be cached.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional


def _number(value: Any, name: str, default: Optional[float] = None) -> Optional[float]:
    """A finite JSON number, or `default` when the field is null or absent."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return value


def _text(value: Any, name: str, default: Optional[str] = "") -> Optional[str]:
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def _object(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object, got {type(value).__name__}")
    return value


def _asset_id(coin: dict[str, Any]) -> str:
    """The required `id` field. Raises KeyError if absent."""
    asset_id = coin["id"]
    if not isinstance(asset_id, str) or not asset_id:
        raise ValueError(f"id must be a non-empty string, got {asset_id!r}")
    return asset_id


def _usd(market_data: dict, key: str) -> float:
    """Read market_data[key]["usd"], defaulting to 0."""
    values = _object(market_data.get(key), f"market_data.{key}")
    return _number(values.get("usd"), f"market_data.{key}.usd", 0)


def _series(value: Any, name: str) -> list[list[Optional[float]]]:
    """A list of [epoch_millis, value] points; the value may be null."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list")
    for i, point in enumerate(value):
        if not isinstance(point, list) or len(point) != 2:
            raise ValueError(f"{name}[{i}] must be a [timestamp, value] pair, got {point!r}")
        if _number(point[0], f"{name}[{i}] timestamp") is None:
            raise ValueError(f"{name}[{i}] has no timestamp")
        _number(point[1], f"{name}[{i}] value")
    return value


@dataclass
class AssetSummary:
    """One row of the market snapshot (top assets by market cap)."""

    id: str
    symbol: str
    name: str
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    total_volume: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    image: Optional[str] = None

    @classmethod
    def from_coingecko(cls, coin: dict[str, Any]) -> "AssetSummary":
        """Normalize an entry of /coins/markets. Raises KeyError if `id` is absent."""
        coin = _object(coin, "markets entry")
        return cls(
            id=_asset_id(coin),
            symbol=_text(coin.get("symbol"), "symbol"),
            name=_text(coin.get("name"), "name"),
            current_price=_number(coin.get("current_price"), "current_price"),
            market_cap=_number(coin.get("market_cap"), "market_cap"),
            total_volume=_number(coin.get("total_volume"), "total_volume"),
            price_change_percentage_24h=_number(
                coin.get("price_change_percentage_24h"), "price_change_percentage_24h"
            ),
            image=_text(coin.get("image"), "image", None),
        )


@dataclass
class AssetDetail:
    """
    Flattened per-asset detail.

    The upstream nests prices under market_data.<field>.usd; every optional
    field defaults to zero or empty instead of being left undefined.
    """

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
    links: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_coingecko(cls, coin: dict[str, Any]) -> "AssetDetail":
        """Normalize a /coins/{id} response. Raises KeyError if `id` is absent."""
        market_data = _object(coin.get("market_data"), "market_data")
        image = _object(coin.get("image"), "image")
        description = _object(coin.get("description"), "description")
        return cls(
            id=_asset_id(coin),
            symbol=_text(coin.get("symbol"), "symbol"),
            name=_text(coin.get("name"), "name"),
            current_price=_usd(market_data, "current_price"),
            market_cap=_usd(market_data, "market_cap"),
            total_volume=_usd(market_data, "total_volume"),
            price_change_percentage_24h=_number(
                market_data.get("price_change_percentage_24h"),
                "market_data.price_change_percentage_24h",
                0,
            ),
            price_change_24h=_number(
                market_data.get("price_change_24h"), "market_data.price_change_24h", 0
            ),
            image=_text(image.get("small"), "image.small"),
            description=_text(description.get("en"), "description.en"),
            links=_object(coin.get("links"), "links"),
        )


@dataclass
class PriceHistory:
    """Time series of [epoch_millis, value] pairs for charting."""

    prices: list[list[float]]
    market_caps: list[list[float]] = field(default_factory=list)
    total_volumes: list[list[float]] = field(default_factory=list)

    @classmethod
    def from_coingecko(cls, chart: Any) -> "PriceHistory":
        """
        Normalize a /coins/{id}/market_chart response.

        Raises ValueError when the `prices` series is missing or empty, or
        when any series holds something other than [timestamp, value] pairs.
        """
        if not isinstance(chart, dict):
            raise ValueError("market chart response is not an object")
        prices = _series(chart.get("prices"), "prices")
        if not prices:
            raise ValueError("market chart response has no prices")
        return cls(
            prices=prices,
            market_caps=_series(chart.get("market_caps"), "market_caps"),
            total_volumes=_series(chart.get("total_volumes"), "total_volumes"),
        )
