"""Ledger service for simulated trading against the persisted wallet."""

import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Any, Iterable, Mapping, Optional

from cryptosim.core.exceptions import (
    AppError,
    InvalidAmountError,
    InvalidPriceError,
    InsufficientFundsError,
    InsufficientHoldingsError,
)
from cryptosim.domain.models import (
    Wallet,
    TradeSide,
    TradeError,
    DUST_THRESHOLD,
    DEFAULT_INITIAL_CASH,
)
from cryptosim.domain.views import AssetSummary, TradeResult
from cryptosim.repositories.protocols import WalletStore

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a user or upstream number to Decimal; None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


def build_price_map(assets: Iterable[AssetSummary]) -> dict[str, Decimal]:
    """Map asset id -> current price from a market snapshot, skipping unpriced assets."""
    prices: dict[str, Decimal] = {}
    for asset in assets:
        price = _to_decimal(asset.current_price)
        if price is not None:
            prices[asset.id] = price
    return prices


class LedgerService:
    """
    Service for executing simulated trades against a single wallet.

    Every operation reads the whole wallet from the store and, for trades,
    writes the whole wallet back. Rejected trades are reported as failed
    TradeResults and leave the stored wallet untouched.
    """

    def __init__(
        self,
        wallet_store: WalletStore,
        initial_cash: Decimal = DEFAULT_INITIAL_CASH,
    ):
        self._store = wallet_store
        self._initial_cash = initial_cash

    def get_wallet(self) -> Wallet:
        """Return the persisted wallet, creating the default wallet on first access."""
        wallet = self._store.load()
        if wallet is None:
            wallet = Wallet(cash=self._initial_cash)
            self._store.save(wallet)
        return wallet

    def buy_crypto(self, asset_id: str, amount_usd: Any, price_per_unit: Any) -> TradeResult:
        """
        Spend `amount_usd` cash on `asset_id` at `price_per_unit`.

        Fails with INVALID_AMOUNT, INVALID_PRICE or INSUFFICIENT_FUNDS.
        """
        wallet = self.get_wallet()
        try:
            amount, price = self._validate_trade_inputs(amount_usd, price_per_unit)
            if amount > wallet.cash:
                raise InsufficientFundsError(available=f"{wallet.cash:.2f}")
        except AppError as e:
            return self._rejected(TradeSide.BUY, asset_id, e)

        quantity = amount / price
        new_wallet = wallet.copy()
        new_wallet.cash -= amount
        new_wallet.holdings[asset_id] = wallet.holding(asset_id) + quantity
        self._store.save(new_wallet)

        logger.debug(f"Bought {quantity} {asset_id} for ${amount} at ${price}")
        return TradeResult(
            success=True,
            message=f"Successfully bought {quantity:.6f} {asset_id.upper()} for ${amount:.2f}",
            side=TradeSide.BUY,
            asset_id=asset_id,
            quantity=quantity,
            wallet=new_wallet,
        )

    def sell_crypto(self, asset_id: str, amount_usd: Any, price_per_unit: Any) -> TradeResult:
        """
        Sell `amount_usd` worth of `asset_id` at `price_per_unit`.

        Fails with INVALID_AMOUNT, INVALID_PRICE or INSUFFICIENT_HOLDINGS.
        A position left below the dust threshold is closed.
        """
        wallet = self.get_wallet()
        current_holding = wallet.holding(asset_id)
        try:
            amount, price = self._validate_trade_inputs(amount_usd, price_per_unit)
            quantity = amount / price
            if quantity > current_holding:
                raise InsufficientHoldingsError(asset_id, available=f"{current_holding:.6f}")
        except AppError as e:
            return self._rejected(TradeSide.SELL, asset_id, e)

        new_wallet = wallet.copy()
        remaining = current_holding - quantity
        if remaining < DUST_THRESHOLD:
            new_wallet.holdings.pop(asset_id, None)
        else:
            new_wallet.holdings[asset_id] = remaining
        new_wallet.cash += amount
        self._store.save(new_wallet)

        logger.debug(f"Sold {quantity} {asset_id} for ${amount} at ${price}")
        return TradeResult(
            success=True,
            message=f"Successfully sold {quantity:.6f} {asset_id.upper()} for ${amount:.2f}",
            side=TradeSide.SELL,
            asset_id=asset_id,
            quantity=quantity,
            wallet=new_wallet,
        )

    def get_total_portfolio_value(self, price_map: Mapping[str, Any]) -> Decimal:
        """
        Cash plus the market value of every holding.

        Holdings without a usable price in `price_map` count as 0.
        """
        wallet = self.get_wallet()
        crypto_value = ZERO
        for asset_id, quantity in wallet.holdings.items():
            price = _to_decimal(price_map.get(asset_id)) or ZERO
            crypto_value += quantity * price
        return wallet.cash + crypto_value

    def get_crypto_holding(self, asset_id: str) -> Decimal:
        return self.get_wallet().holding(asset_id)

    def get_cash_balance(self) -> Decimal:
        return self.get_wallet().cash

    def max_buy_amount(self) -> Decimal:
        """Largest USD amount a buy can spend: the whole cash balance."""
        return self.get_cash_balance()

    def max_sell_amount(self, asset_id: str, price_per_unit: Any) -> Decimal:
        """
        USD value of the entire holding, rounded down to whole cents.

        Selling the returned amount at the same price never needs more units
        than are held.
        """
        price = _to_decimal(price_per_unit)
        if price is None or price <= 0:
            return ZERO
        holding = self.get_crypto_holding(asset_id)
        amount = (holding * price).quantize(CENT, rounding=ROUND_DOWN)
        # The product may round up past the exact value at the last digit
        if amount / price > holding:
            amount -= CENT
        return max(amount, ZERO)

    @staticmethod
    def estimate_quantity(amount_usd: Any, price_per_unit: Any) -> Decimal:
        """Units a trade of `amount_usd` would move; 0 for non-positive input."""
        amount = _to_decimal(amount_usd)
        price = _to_decimal(price_per_unit)
        if amount is None or price is None or amount <= 0 or price <= 0:
            return ZERO
        return amount / price

    @staticmethod
    def _validate_trade_inputs(amount_usd: Any, price_per_unit: Any) -> tuple[Decimal, Decimal]:
        amount = _to_decimal(amount_usd)
        if amount is None or amount <= 0:
            raise InvalidAmountError()
        price = _to_decimal(price_per_unit)
        if price is None or price <= 0:
            raise InvalidPriceError()
        return amount, price

    @staticmethod
    def _rejected(side: TradeSide, asset_id: str, error: AppError) -> TradeResult:
        logger.debug(f"{side.value} {asset_id} rejected: {error.message}")
        return TradeResult(
            success=False,
            message=error.message,
            side=side,
            asset_id=asset_id,
            error=TradeError(error.code),
        )
