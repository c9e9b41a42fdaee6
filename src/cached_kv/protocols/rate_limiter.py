"""Rate limiter protocol."""

from typing import Protocol, runtime_checkable

from cached_kv.entities import RateLimitDecisionEntity


@runtime_checkable
class RateLimiter(Protocol):
    """Protocol for rate limiters pre-configured with a threshold and period."""

    def limit(self, key: str) -> RateLimitDecisionEntity:
        """Count one request for the key and decide whether it is allowed.

        Args:
            key: Client identifier that partitions quota accounting

        Returns:
            Decision with success=False once the threshold is exceeded
        """
        ...
