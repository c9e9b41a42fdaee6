"""
Tests for the Redis repositories (with fakeredis) and the in-memory ones.
"""

import fakeredis
import pytest

from cached_kv.entities import CachedResponseEntity
from cached_kv.protocols import KVStore, RateLimiter, ResponseCache
from cached_kv.repositories import (
    InMemoryKVStore,
    InMemoryRateLimiter,
    InMemoryResponseCache,
    RedisKVStore,
    RedisRateLimiter,
    RedisResponseCache,
)


@pytest.fixture
def redis_client():
    """Create fakeredis client for testing."""
    client = fakeredis.FakeRedis(decode_responses=True)
    yield client
    client.flushall()


def test_implementations_satisfy_protocols(redis_client):
    """Test structural typing against the protocols."""
    assert isinstance(RedisKVStore(redis_client=redis_client), KVStore)
    assert isinstance(InMemoryKVStore(), KVStore)
    assert isinstance(RedisResponseCache(redis_client=redis_client), ResponseCache)
    assert isinstance(InMemoryResponseCache(), ResponseCache)
    assert isinstance(RedisRateLimiter(redis_client=redis_client), RateLimiter)
    assert isinstance(InMemoryRateLimiter(), RateLimiter)


def test_redis_kv_store_put_get_list(redis_client):
    """Test writes, reads and sorted listing under the namespace."""
    store = RedisKVStore(redis_client=redis_client, namespace="kv")
    store.put("b", "2")
    store.put("a", "1")
    store.put("a", "3")
    redis_client.set("other:z", "ignored")

    assert store.get("a") == "3"
    assert store.get("missing") is None
    assert store.list_keys() == ["a", "b"]
    assert redis_client.get("kv:a") == "3"


def test_redis_kv_store_keys_with_colons(redis_client):
    """Test that only the namespace prefix is stripped."""
    store = RedisKVStore(redis_client=redis_client, namespace="kv")
    store.put("user:1", "x")
    assert store.list_keys() == ["user:1"]
    assert store.get("user:1") == "x"


def test_redis_kv_store_list_limit(redis_client):
    """Test that one listing returns at most list_limit keys."""
    store = RedisKVStore(redis_client=redis_client, namespace="kv", list_limit=3)
    for key in "edcba":
        store.put(key, key)
    assert store.list_keys() == ["a", "b", "c"]


def test_redis_kv_store_health(redis_client):
    """Test the health check."""
    assert RedisKVStore(redis_client=redis_client).health_check() is True


def test_redis_response_cache_roundtrip_and_ttl(redis_client):
    """Test that snapshots are stored with a Redis expiry."""
    cache = RedisResponseCache(redis_client=redis_client, prefix="rc")
    entry = CachedResponseEntity(
        status_code=200,
        body='{\n  "a": "1"\n}',
        headers={"Content-Type": "application/json", "X-Cache-Status": "MISS"},
        stored_at=123.0,
    )

    assert cache.match("GET http://testserver/") is None
    cache.put("GET http://testserver/", entry, 60)

    assert cache.match("GET http://testserver/") == entry
    assert 0 < redis_client.ttl("rc:GET http://testserver/") <= 60


def test_redis_response_cache_expired_entry(redis_client):
    """Test that an entry gone from Redis is a miss."""
    cache = RedisResponseCache(redis_client=redis_client, prefix="rc")
    cache.put("GET http://testserver/", CachedResponseEntity(status_code=200, body="{}"), 60)
    redis_client.delete("rc:GET http://testserver/")
    assert cache.match("GET http://testserver/") is None


def test_redis_rate_limiter_fixed_window(redis_client, clock):
    """Test the threshold and the reset at the next window."""
    limiter = RedisRateLimiter(redis_client=redis_client, limit=2, period=60, prefix="rl", clock=clock)

    assert limiter.limit("ip").success is True
    assert limiter.limit("ip").success is True
    denied = limiter.limit("ip")
    assert denied.success is False
    assert denied.count == 3
    assert denied.limit == 2

    assert limiter.limit("other-ip").success is True

    clock.advance(60)
    assert limiter.limit("ip").success is True


def test_redis_rate_limiter_counter_expires(redis_client, clock):
    """Test that counters carry an expiry."""
    limiter = RedisRateLimiter(redis_client=redis_client, limit=2, period=60, prefix="rl", clock=clock)
    limiter.limit("ip")
    window = int(clock() // 60)
    assert 0 < redis_client.ttl(f"rl:ip:{window}") <= 60


def test_in_memory_cache_expiry(clock):
    """Test TTL expiry in the in-memory cache."""
    cache = InMemoryResponseCache(clock=clock)
    entry = CachedResponseEntity(status_code=200, body="{}")
    cache.put("id", entry, 10)

    clock.advance(9)
    assert cache.match("id") == entry
    clock.advance(1)
    assert cache.match("id") is None


def test_in_memory_store_listing():
    """Test sorting and capping in the in-memory store."""
    store = InMemoryKVStore(list_limit=2)
    store.put("c", "3")
    store.put("a", "1")
    store.put("b", "2")
    assert store.list_keys() == ["a", "b"]
    assert store.get("c") == "3"
    assert store.get("d") is None


def test_in_memory_rate_limiter_window(clock):
    """Test the in-memory fixed window."""
    limiter = InMemoryRateLimiter(limit=1, period=60, clock=clock)
    assert limiter.limit("k").success is True
    assert limiter.limit("k").success is False
    clock.advance(60)
    assert limiter.limit("k").success is True
