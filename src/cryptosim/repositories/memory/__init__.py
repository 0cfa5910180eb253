"""In-memory repository implementations."""

from cryptosim.repositories.memory.ttl_cache import TtlCache

__all__ = ["TtlCache"]
