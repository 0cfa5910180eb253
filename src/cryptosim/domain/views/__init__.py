"""View models for service outputs."""

from cryptosim.domain.views.market import AssetSummary, AssetDetail, PriceHistory
from cryptosim.domain.views.trade import TradeResult

__all__ = [
    "AssetSummary",
    "AssetDetail",
    "PriceHistory",
    "TradeResult",
]
