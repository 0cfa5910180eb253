"""
Pytest configuration and fixtures for the trading simulator tests.

This module provides:
- In-memory SQLite database fixtures for the wallet store
- Ledger fixtures
- A controllable clock for cache freshness tests
- A deterministic fake upstream provider with call counting
- A FastAPI test client wired to the fake gateway
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from cryptosim.main import app
from cryptosim.api.deps import get_market_data_service
from cryptosim.repositories.sqlalchemy.database import Base
# Import ORM models to register them with Base before creating tables
from cryptosim.repositories.sqlalchemy import orm_models  # noqa: F401
from cryptosim.repositories.sqlalchemy import SqlAlchemyWalletStore
from cryptosim.services import LedgerService, MarketDataService
from cryptosim.core.exceptions import RateLimitedError, UpstreamFailureError
from cryptosim.core.timezone import UTC_TZ
from cryptosim.config.settings import reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or utc_datetime(2024, 6, 15, 14, 30, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock frozen at a fixed instant."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# LEDGER FIXTURES
# =============================================================================


@pytest.fixture
def wallet_store(test_session) -> SqlAlchemyWalletStore:
    """Provide a wallet store on the test database."""
    return SqlAlchemyWalletStore(test_session)


@pytest.fixture
def ledger_service(wallet_store) -> LedgerService:
    """Provide a LedgerService whose wallet starts with $1000."""
    return LedgerService(wallet_store=wallet_store)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


MARKETS_PAYLOAD = [
    {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": "https://assets.example/bitcoin.png",
        "current_price": 50000.0,
        "market_cap": 980000000000,
        "total_volume": 25000000000,
        "price_change_percentage_24h": 1.25,
        "high_24h": 50500.0,
    },
    {
        "id": "ethereum",
        "symbol": "eth",
        "name": "Ethereum",
        "image": "https://assets.example/ethereum.png",
        "current_price": 3000.0,
        "market_cap": 360000000000,
        "total_volume": 12000000000,
        "price_change_percentage_24h": -0.5,
    },
]

COIN_PAYLOADS = {
    "bitcoin": {
        "id": "bitcoin",
        "symbol": "btc",
        "name": "Bitcoin",
        "image": {"thumb": "t.png", "small": "s.png", "large": "l.png"},
        "description": {"en": "The first cryptocurrency."},
        "links": {"homepage": ["https://bitcoin.org"]},
        "market_data": {
            "current_price": {"usd": 50000.0, "eur": 46000.0},
            "market_cap": {"usd": 980000000000},
            "total_volume": {"usd": 25000000000},
            "price_change_percentage_24h": 1.25,
            "price_change_24h": 617.28,
        },
    },
}

CHART_PAYLOAD = {
    "prices": [[1718400000000, 49500.0], [1718486400000, 50000.0]],
    "market_caps": [[1718400000000, 970000000000], [1718486400000, 980000000000]],
    "total_volumes": [[1718400000000, 24000000000], [1718486400000, 25000000000]],
}


class FakeMarketProvider:
    """
    Deterministic upstream provider for testing.

    Counts calls per endpoint. Set `rate_limited` or `failing` to make every
    subsequent call raise the corresponding upstream error.
    """

    def __init__(self):
        self.calls = {"markets": 0, "coin": 0, "chart": 0}
        self.chart_requests: list[tuple[str, str, str, Optional[str]]] = []
        self.rate_limited = False
        self.failing = False
        self.markets_payload: Any = [dict(c) for c in MARKETS_PAYLOAD]
        self.chart_payload: Any = dict(CHART_PAYLOAD)
        self.coin_payloads: dict[str, Any] = dict(COIN_PAYLOADS)

    def _check(self) -> None:
        if self.rate_limited:
            raise RateLimitedError()
        if self.failing:
            raise UpstreamFailureError("Upstream returned HTTP 503", details="Service Unavailable")

    def fetch_markets(self, vs_currency: str, per_page: int) -> Any:
        self.calls["markets"] += 1
        self._check()
        return self.markets_payload

    def fetch_coin(self, asset_id: str) -> Any:
        self.calls["coin"] += 1
        self._check()
        if asset_id not in self.coin_payloads:
            raise UpstreamFailureError("Upstream returned HTTP 404", details='{"error":"coin not found"}')
        return self.coin_payloads[asset_id]

    def fetch_market_chart(
        self,
        asset_id: str,
        vs_currency: str,
        days: str,
        interval: Optional[str] = None,
    ) -> Any:
        self.calls["chart"] += 1
        self.chart_requests.append((asset_id, vs_currency, days, interval))
        self._check()
        return self.chart_payload


@pytest.fixture
def fake_provider() -> FakeMarketProvider:
    """Provide a fresh fake upstream provider."""
    return FakeMarketProvider()


@pytest.fixture
def market_data_service(fake_provider, fake_clock) -> MarketDataService:
    """Provide a MarketDataService over the fake provider and clock."""
    return MarketDataService(
        provider=fake_provider,
        cache_ttl_seconds=60,
        rate_limit_retry_after=60,
        clock=fake_clock,
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(market_data_service) -> TestClient:
    """Provide FastAPI test client backed by the fake gateway."""
    app.dependency_overrides[get_market_data_service] = lambda: market_data_service
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.00000001"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
