"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from cached_kv.repositories import InMemoryKVStore
    from cached_kv.services import KVService

    kv = KVService.create(store=InMemoryKVStore())
    ```
"""

from .kv_service import KVService
from .rate_limit_service import RateLimitService
from .response_cache_service import ResponseCacheService

__all__ = [
    "KVService",
    "RateLimitService",
    "ResponseCacheService",
]
