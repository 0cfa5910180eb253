"""In-memory TTL cache used by the market data gateway."""

from datetime import datetime, timedelta
from typing import Callable, Generic, Hashable, TypeVar

from cryptosim.core.timezone import now_utc
from cryptosim.domain.models import CacheEntry, CacheLookup, CacheStatus

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TtlCache(Generic[K, V]):
    """
    Keyed cache whose entries are FRESH for a fixed window after being stored.

    Expired entries are never evicted: they stay readable as STALE so callers
    can fall back to them when the upstream is unavailable. Contents live only
    as long as the process.
    """

    def __init__(
        self,
        ttl_seconds: float = 60,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}

    def get(self, key: K) -> CacheLookup[V]:
        """Look up a key and classify it as FRESH, STALE or MISS."""
        entry = self._entries.get(key)
        if entry is None:
            return CacheLookup.miss()

        age = self._clock() - entry.stored_at
        status = CacheStatus.FRESH if age < self._ttl else CacheStatus.STALE
        return CacheLookup(status=status, value=entry.value)

    def put(self, key: K, value: V) -> None:
        """Store a value; the last writer for a key wins."""
        self._entries[key] = CacheEntry(value=value, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
