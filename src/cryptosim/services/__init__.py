"""Service layer - business logic orchestration."""

from cryptosim.services.ledger_service import LedgerService, build_price_map
from cryptosim.services.market_data_service import MarketDataService, normalize_days
from cryptosim.services.auth_service import DemoAuthService

__all__ = [
    "LedgerService",
    "build_price_map",
    "MarketDataService",
    "normalize_days",
    "DemoAuthService",
]
