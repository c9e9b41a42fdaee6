"""Redis implementation of ResponseCache.

Snapshots are stored as JSON documents with a Redis TTL, so expiry is
handled by Redis itself.
"""

import json

import redis

from cached_kv.config import get_redis_client, settings
from cached_kv.entities import CachedResponseEntity


class RedisResponseCache:
    """Redis-backed response cache. Satisfies the ResponseCache protocol."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ) -> None:
        """Initialize the Redis response cache.

        Args:
            redis_client: Redis client instance. If None, creates default.
            prefix: Prefix for cache keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = prefix or settings.cache_prefix

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ) -> "RedisResponseCache":
        """Factory method to create RedisResponseCache with defaults."""
        return cls(redis_client=redis_client, prefix=prefix)

    def _cache_key(self, identity: str) -> str:
        return f"{self._prefix}:{identity}"

    def match(self, identity: str) -> CachedResponseEntity | None:
        """Look up a non-expired response snapshot.

        Args:
            identity: Request identity (method and full URL)

        Returns:
            The cached snapshot, or None on a miss
        """
        raw = self._client.get(self._cache_key(identity))
        if raw is None:
            return None
        return CachedResponseEntity.from_dict(json.loads(raw))

    def put(self, identity: str, entry: CachedResponseEntity, ttl: int) -> None:
        """Store a response snapshot with a Redis expiry.

        Args:
            identity: Request identity (method and full URL)
            entry: The snapshot to store
            ttl: Freshness window in seconds
        """
        self._client.setex(self._cache_key(identity), ttl, json.dumps(entry.to_dict()))
