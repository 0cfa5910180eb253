"""Application context for the client-side trading session.

The ledger never runs behind HTTP: the client owns its wallet store and
calls the ledger in-process, while prices come from the market data gateway.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from cryptosim.config.settings import Settings, set_settings, get_settings
from cryptosim.providers import CoinGeckoProvider
from cryptosim.repositories.sqlalchemy import (
    SqlAlchemyWalletStore,
    get_session,
    init_db,
    reset_database,
)
from cryptosim.services import (
    LedgerService,
    MarketDataService,
    DemoAuthService,
    build_price_map,
)


class AppContext:
    """
    In-process access to one user's session.

    Owns the wallet store (created once and shared by reference with the
    ledger), the market data gateway and the demo login state.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        market_data: Optional[MarketDataService] = None,
    ):
        """
        Create an uninitialized session; nothing touches disk until first use.

        Args:
            data_dir: Directory for the wallet database. Defaults to ~/.cryptosim.
            market_data: Optional gateway to use instead of the CoinGecko-backed one.
        """
        self._data_dir = data_dir
        self._session = None
        self._initialized = False
        self._authenticated = False

        self._wallet_store: Optional[SqlAlchemyWalletStore] = None
        self._ledger_service: Optional[LedgerService] = None
        self._market_data_service: Optional[MarketDataService] = market_data
        self._provider: Optional[CoinGeckoProvider] = None

    def initialize(self, data_dir: Optional[Path] = None) -> None:
        """
        Point the session at a wallet database, creating its table if needed.

        Args:
            data_dir: New directory for the wallet database; keeps the current one if omitted.
        """
        if data_dir:
            self._data_dir = data_dir

        set_settings(Settings(data_dir=self._data_dir))

        reset_database()
        init_db()

        self._close_session()
        self._wallet_store = None
        self._ledger_service = None
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        """True once the wallet database has been set up."""
        return self._initialized

    @property
    def data_dir(self) -> Path:
        """Directory holding wallet.db."""
        return get_settings().get_data_dir()

    def _get_session(self):
        """Session backing the wallet store, opened on first use."""
        if self._session is None:
            self._session = get_session()
        return self._session

    @property
    def wallet_store(self) -> SqlAlchemyWalletStore:
        """The session's single wallet store."""
        if not self._initialized:
            self.initialize()
        if self._wallet_store is None:
            self._wallet_store = SqlAlchemyWalletStore(
                self._get_session(),
                storage_key=get_settings().wallet_storage_key,
            )
        return self._wallet_store

    @property
    def ledger(self) -> LedgerService:
        """Ledger bound to the session's wallet store."""
        if self._ledger_service is None:
            self._ledger_service = LedgerService(
                wallet_store=self.wallet_store,
                initial_cash=get_settings().initial_cash,
            )
        return self._ledger_service

    @property
    def market_data(self) -> MarketDataService:
        """Gateway client; CoinGecko-backed unless one was injected."""
        if self._market_data_service is None:
            settings = get_settings()
            self._provider = CoinGeckoProvider.from_settings(settings)
            self._market_data_service = MarketDataService(
                provider=self._provider,
                cache_ttl_seconds=settings.market_data_cache_ttl_seconds,
                vs_currency=settings.vs_currency,
                markets_per_page=settings.markets_per_page,
                rate_limit_retry_after=settings.rate_limit_retry_after_seconds,
            )
        return self._market_data_service

    # Demo login

    def login(self, username: str, password: str) -> bool:
        """Check the demo credential; the session stays authenticated on success."""
        settings = get_settings()
        auth = DemoAuthService(settings.demo_username, settings.demo_password)
        self._authenticated = auth.authenticate(username, password)
        return self._authenticated

    def logout(self) -> None:
        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def get_portfolio_value(self) -> Decimal:
        """Value the wallet at the latest market snapshot prices."""
        prices = build_price_map(self.market_data.get_market_snapshot())
        return self.ledger.get_total_portfolio_value(prices)

    def _close_session(self) -> None:
        if self._session:
            self._session.close()
            self._session = None

    def close(self) -> None:
        """Close the wallet session and the upstream HTTP session."""
        self._close_session()
        if self._provider is not None:
            self._provider.close()
            self._provider = None
