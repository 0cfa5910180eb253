"""Repository protocol definitions (interfaces)."""

from cryptosim.repositories.protocols.wallet_store import WalletStore
from cryptosim.repositories.protocols.cache_repo import CacheRepository

__all__ = [
    "WalletStore",
    "CacheRepository",
]
