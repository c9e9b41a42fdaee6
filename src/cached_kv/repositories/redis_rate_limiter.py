"""Redis implementation of RateLimiter.

Fixed window counter: one Redis key per client and window, incremented
and given an expiry in a single pipeline.
"""

import time
from collections.abc import Callable

import redis

from cached_kv.config import get_redis_client, settings
from cached_kv.entities import RateLimitDecisionEntity


class RedisRateLimiter:
    """Redis-backed rate limiter. Satisfies the RateLimiter protocol."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        limit: int | None = None,
        period: int | None = None,
        prefix: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the Redis rate limiter.

        Args:
            redis_client: Redis client instance. If None, creates default.
            limit: Requests allowed per window. Defaults to settings.
            period: Window length in seconds. Defaults to settings.
            prefix: Prefix for counter keys. Defaults to settings.
            clock: Time source, used to pick the current window.
        """
        self._client = redis_client or get_redis_client()
        self._limit = limit or settings.rate_limit_per_minute
        self._period = period or settings.rate_limit_period
        self._prefix = prefix or settings.rate_limit_prefix
        self._clock = clock

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        limit: int | None = None,
        period: int | None = None,
        prefix: str | None = None,
    ) -> "RedisRateLimiter":
        """Factory method to create RedisRateLimiter with defaults."""
        return cls(redis_client=redis_client, limit=limit, period=period, prefix=prefix)

    def limit(self, key: str) -> RateLimitDecisionEntity:
        """Count one request for the key in the current window.

        Args:
            key: Client identifier

        Returns:
            Decision with success=False once the count passes the limit
        """
        window = int(self._clock() // self._period)
        counter_key = f"{self._prefix}:{key}:{window}"

        pipe = self._client.pipeline()
        pipe.incr(counter_key)
        pipe.expire(counter_key, self._period)
        count, _ = pipe.execute()

        return RateLimitDecisionEntity(
            key=key,
            success=int(count) <= self._limit,
            count=int(count),
            limit=self._limit,
        )
