"""Wallet store protocol."""

from typing import Protocol, Optional

from cryptosim.domain.models import Wallet


class WalletStore(Protocol):
    """
    Interface for the single persisted wallet record.

    The record is read and written whole on every operation; there are no
    partial updates.
    """

    def load(self) -> Optional[Wallet]:
        """Return the stored wallet, or None if nothing (valid) is stored."""
        ...

    def save(self, wallet: Wallet) -> None:
        """Replace the stored wallet."""
        ...
