"""Cached KV - key-value HTTP API with a cached read and a rate-limited write.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (KVStore, ResponseCache, RateLimiter)
    - repositories: Redis and in-memory implementations
    - services: Business logic
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from cached_kv.repositories import InMemoryKVStore
    from cached_kv.services import KVService

    kv = KVService.create(store=InMemoryKVStore())
    ```

For HTTP API:
    ```python
    from cached_kv.api.app import app, create_app
    ```
"""

from cached_kv.config import get_redis_client, settings
from cached_kv.dto import ErrorResponse, SetValueRequest, SetValueResponse
from cached_kv.entities import CachedResponseEntity, RateLimitDecisionEntity, StoredRecordEntity
from cached_kv.errors import (
    KVServiceError,
    MalformedRequestBodyError,
    RateLimitExceededError,
    RouteNotFoundError,
    ValidationFailureError,
)
from cached_kv.handlers import KVHandler
from cached_kv.protocols import KVStore, RateLimiter, ResponseCache
from cached_kv.repositories import (
    InMemoryKVStore,
    InMemoryRateLimiter,
    InMemoryResponseCache,
    RedisKVStore,
    RedisRateLimiter,
    RedisResponseCache,
)
from cached_kv.services import KVService, RateLimitService, ResponseCacheService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "KVStore",
    "RateLimiter",
    "ResponseCache",
    # Services (business logic)
    "KVService",
    "RateLimitService",
    "ResponseCacheService",
    # Handlers (HTTP)
    "KVHandler",
    # Repositories (data access)
    "RedisKVStore",
    "RedisRateLimiter",
    "RedisResponseCache",
    "InMemoryKVStore",
    "InMemoryRateLimiter",
    "InMemoryResponseCache",
    # Entities (domain models)
    "StoredRecordEntity",
    "CachedResponseEntity",
    "RateLimitDecisionEntity",
    # DTOs (API contracts)
    "SetValueRequest",
    "SetValueResponse",
    "ErrorResponse",
    # Errors
    "KVServiceError",
    "RateLimitExceededError",
    "MalformedRequestBodyError",
    "ValidationFailureError",
    "RouteNotFoundError",
]
