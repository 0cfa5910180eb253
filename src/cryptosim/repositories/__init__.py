"""Repository layer - data access abstractions and implementations."""

from cryptosim.repositories.protocols import WalletStore, CacheRepository

__all__ = [
    "WalletStore",
    "CacheRepository",
]
