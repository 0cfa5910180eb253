"""Cache repository protocol for gateway responses."""

from typing import Protocol, TypeVar

from cryptosim.domain.models import CacheLookup

K = TypeVar("K", contravariant=True)
V = TypeVar("V")


class CacheRepository(Protocol[K, V]):
    """Interface for a keyed cache with a fixed freshness window."""

    def get(self, key: K) -> CacheLookup[V]:
        """Look up a key; stale entries are returned, not discarded."""
        ...

    def put(self, key: K, value: V) -> None:
        """Store a value, making the key fresh again."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...
