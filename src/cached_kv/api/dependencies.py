"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Handler stored in app.state during lifespan (or up front by create_app)
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

import redis
from fastapi import Depends, FastAPI, Request

from cached_kv.config import Settings, configure_logging, get_redis_client, settings
from cached_kv.handlers import KVHandler
from cached_kv.repositories import (
    InMemoryKVStore,
    InMemoryRateLimiter,
    InMemoryResponseCache,
    RedisKVStore,
    RedisRateLimiter,
    RedisResponseCache,
)
from cached_kv.services import KVService, RateLimitService, ResponseCacheService

logger = logging.getLogger(__name__)


def build_handler(config: Settings | None = None, redis_client: redis.Redis | None = None) -> KVHandler:
    """Wire repositories, services and the handler for the configured backend.

    Args:
        config: Settings to build from. Defaults to settings.
        redis_client: Redis client for the redis backend. If None, one is
            created from the config.

    Returns:
        A ready KVHandler
    """
    config = config or settings

    if config.uses_redis:
        client = redis_client or get_redis_client(config)
        store = RedisKVStore.create(
            redis_client=client,
            namespace=config.kv_namespace,
            list_limit=config.kv_list_limit,
        )
        cache = RedisResponseCache.create(redis_client=client, prefix=config.cache_prefix)
        limiter = RedisRateLimiter.create(
            redis_client=client,
            limit=config.rate_limit_per_minute,
            period=config.rate_limit_period,
            prefix=config.rate_limit_prefix,
        )
    else:
        store = InMemoryKVStore(list_limit=config.kv_list_limit)
        cache = InMemoryResponseCache()
        limiter = InMemoryRateLimiter(limit=config.rate_limit_per_minute, period=config.rate_limit_period)

    return KVHandler(
        kv_service=KVService.create(store=store, list_limit=config.kv_list_limit),
        cache_service=ResponseCacheService.create(cache=cache, default_ttl=config.cache_ttl),
        rate_limit_service=RateLimitService.create(limiter=limiter, retry_after=config.rate_limit_period),
    )


def get_handler(request: Request) -> KVHandler:
    """Dependency injection for KVHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The KVHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "kv_handler", None)
    if handler is None:
        raise RuntimeError("KVHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Configures logging and builds the handler from settings unless one
    was injected already (create_app(handler=...)), and stores it in
    app.state.kv_handler. An injected handler leaves logging alone.

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    owned = getattr(app.state, "kv_handler", None) is None
    if owned:
        configure_logging(settings)
        app.state.kv_handler = build_handler(settings)

    logger.info(
        "Key-value API started (backend=%s, rate limit=%d/%ds, cache ttl=%ds)",
        settings.storage_backend,
        settings.rate_limit_per_minute,
        settings.rate_limit_period,
        settings.cache_ttl,
    )
    if owned and settings.uses_redis:
        if app.state.kv_handler.is_healthy():
            logger.info("Redis connection successful: %s", settings.redis_url)
        else:
            logger.warning("Redis connection failed: %s", settings.redis_url)

    yield

    if owned:
        del app.state.kv_handler
    logger.info("Key-value API shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[KVHandler, Depends(get_handler)]
