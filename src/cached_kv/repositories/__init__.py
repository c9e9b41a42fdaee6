"""Repository layer for data access.

This layer puts the external collaborators (key-value store, response cache,
rate limiter) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis, in-memory)
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from cached_kv.protocols import KVStore, RateLimiter, ResponseCache

from .in_memory import InMemoryKVStore, InMemoryRateLimiter, InMemoryResponseCache
from .redis_kv_store import RedisKVStore
from .redis_rate_limiter import RedisRateLimiter
from .redis_response_cache import RedisResponseCache

__all__ = [
    "KVStore",
    "RateLimiter",
    "ResponseCache",
    "InMemoryKVStore",
    "InMemoryRateLimiter",
    "InMemoryResponseCache",
    "RedisKVStore",
    "RedisRateLimiter",
    "RedisResponseCache",
]
