"""Email verification challenge stores (in-memory / Redis)."""

from .in_memory_store import InMemoryChallengeStore
from .redis_store import RedisChallengeStore

__all__ = ["InMemoryChallengeStore", "RedisChallengeStore"]
