"""
Shared fixtures: an app wired to in-memory repositories with a controllable clock.
"""

import pytest
from fastapi.testclient import TestClient

from cached_kv.api.app import create_app
from cached_kv.handlers import KVHandler
from cached_kv.repositories import InMemoryKVStore, InMemoryRateLimiter, InMemoryResponseCache
from cached_kv.services import KVService, RateLimitService, ResponseCacheService


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def store():
    """Create an empty in-memory key-value store."""
    return InMemoryKVStore()


@pytest.fixture
def response_cache(clock):
    """Create an in-memory response cache on the fake clock."""
    return InMemoryResponseCache(clock=clock)


@pytest.fixture
def limiter(clock):
    """Create an in-memory rate limiter (10 per 60s) on the fake clock."""
    return InMemoryRateLimiter(limit=10, period=60, clock=clock)


def make_handler(store, response_cache, limiter) -> KVHandler:
    return KVHandler(
        kv_service=KVService.create(store=store, list_limit=store.list_limit),
        cache_service=ResponseCacheService.create(cache=response_cache, default_ttl=60),
        rate_limit_service=RateLimitService.create(limiter=limiter, retry_after=60),
    )


@pytest.fixture
def handler(store, response_cache, limiter):
    """Create a handler over the in-memory repositories."""
    return make_handler(store, response_cache, limiter)


@pytest.fixture
def client(handler):
    """Create a test client."""
    return TestClient(create_app(handler))


@pytest.fixture
def handler_factory():
    """Build handlers over custom repositories."""
    return make_handler
