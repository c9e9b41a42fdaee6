"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis, in-memory, managed platform bindings)
- Unit testing with in-memory fakes
- Clear separation of concerns

Usage:
    ```python
    from cached_kv.protocols import KVStore

    store: KVStore = RedisKVStore.create()   # works
    store: KVStore = InMemoryKVStore()       # also works
    ```
"""

from .kv_store import KVStore
from .rate_limiter import RateLimiter
from .response_cache import ResponseCache

__all__ = [
    "KVStore",
    "RateLimiter",
    "ResponseCache",
]
