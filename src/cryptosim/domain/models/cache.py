"""Cache models for gateway read-through caching."""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Optional, TypeVar

from cryptosim.domain.models.enums import CacheStatus

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached upstream response and the moment it was stored."""

    value: V
    stored_at: datetime


@dataclass(frozen=True)
class CacheLookup(Generic[V]):
    """
    Result of a cache read.

    FRESH and STALE lookups carry the cached value; MISS carries None.
    """

    status: CacheStatus
    value: Optional[V] = None

    @property
    def is_fresh(self) -> bool:
        return self.status == CacheStatus.FRESH

    @property
    def has_value(self) -> bool:
        """True for both FRESH and STALE lookups."""
        return self.status != CacheStatus.MISS

    @classmethod
    def miss(cls) -> "CacheLookup[V]":
        return cls(status=CacheStatus.MISS)
