"""Domain models package."""

from cryptosim.domain.models.enums import TradeSide, TradeError, CacheStatus
from cryptosim.domain.models.wallet import Wallet, DUST_THRESHOLD, DEFAULT_INITIAL_CASH
from cryptosim.domain.models.cache import CacheEntry, CacheLookup

__all__ = [
    "TradeSide",
    "TradeError",
    "CacheStatus",
    "Wallet",
    "DUST_THRESHOLD",
    "DEFAULT_INITIAL_CASH",
    "CacheEntry",
    "CacheLookup",
]
