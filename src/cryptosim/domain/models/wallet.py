"""Wallet domain model."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

# Positions smaller than this are considered closed and dropped from holdings
DUST_THRESHOLD = Decimal("0.000001")

DEFAULT_INITIAL_CASH = Decimal("1000.00")


def _to_decimal(value: Any, name: str) -> Decimal:
    """Convert a stored number or numeric string to Decimal."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{name} must be a number, got {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"{name} must be finite, got {value!r}")
    return result


@dataclass
class Wallet:
    """
    The simulated account: a USD cash balance plus per-asset holdings.

    Invariants: cash >= 0, every holding >= 0, and no holding below
    DUST_THRESHOLD is retained.
    """

    cash: Decimal = field(default_factory=lambda: DEFAULT_INITIAL_CASH)
    holdings: dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.cash = _to_decimal(self.cash, "cash")
        self.holdings = {
            asset_id: _to_decimal(quantity, f"holdings[{asset_id}]")
            for asset_id, quantity in self.holdings.items()
        }

    def holding(self, asset_id: str) -> Decimal:
        """Quantity held of an asset, 0 if none."""
        return self.holdings.get(asset_id, Decimal("0"))

    def copy(self) -> "Wallet":
        return Wallet(cash=self.cash, holdings=dict(self.holdings))

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage; decimals are written as strings to keep precision."""
        return {
            "cash": str(self.cash),
            "holdings": {asset_id: str(qty) for asset_id, qty in self.holdings.items()},
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Wallet":
        """
        Build a wallet from its stored form.

        Accepts numbers or numeric strings. Raises ValueError if the record
        is malformed or violates the wallet invariants.
        """
        if not isinstance(data, dict):
            raise ValueError("Wallet record must be an object")
        if "cash" not in data:
            raise ValueError("Wallet record is missing 'cash'")
        holdings = data.get("holdings") or {}
        if not isinstance(holdings, dict):
            raise ValueError("Wallet 'holdings' must be an object")

        wallet = cls(cash=data["cash"], holdings=holdings)
        if wallet.cash < 0:
            raise ValueError(f"Wallet cash cannot be negative: {wallet.cash}")
        for asset_id, quantity in wallet.holdings.items():
            if quantity < 0:
                raise ValueError(f"Holding of {asset_id} cannot be negative: {quantity}")
        return wallet
