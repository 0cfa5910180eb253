"""Crypto trading simulator: wallet ledger and market data gateway."""

__version__ = "0.1.0"
