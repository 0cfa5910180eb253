"""View model for trade outcomes."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from cryptosim.domain.models import TradeSide, TradeError, Wallet


@dataclass
class TradeResult:
    """Outcome of a buy or sell. Failed trades carry an error code and no wallet."""

    success: bool
    message: str
    side: TradeSide
    asset_id: str
    error: Optional[TradeError] = None
    quantity: Optional[Decimal] = None
    wallet: Optional[Wallet] = None
