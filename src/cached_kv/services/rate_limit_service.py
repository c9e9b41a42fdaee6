"""Rate limit service for the write path."""

import logging
from collections.abc import Mapping

from cached_kv.entities import RateLimitDecisionEntity
from cached_kv.protocols import RateLimiter

logger = logging.getLogger(__name__)

CLIENT_IP_HEADERS = ("CF-Connecting-IP", "X-Forwarded-For")
UNKNOWN_CLIENT = "unknown"


class RateLimitService:
    """Derives the client key and asks the rate limiter for a decision.

    Clients that send none of the identifying headers all share the
    ``"unknown"`` bucket, so together they get one client's quota.
    """

    def __init__(self, limiter: RateLimiter, retry_after: int = 60) -> None:
        """Initialize the rate limit service.

        Args:
            limiter: Rate limiter backend (required).
            retry_after: Seconds advertised in Retry-After when denied.
        """
        self._limiter = limiter
        self._retry_after = retry_after

    @classmethod
    def create(cls, limiter: RateLimiter, retry_after: int = 60) -> "RateLimitService":
        """Factory method to create RateLimitService."""
        return cls(limiter=limiter, retry_after=retry_after)

    @staticmethod
    def client_key(headers: Mapping[str, str]) -> str:
        """First non-empty identifying header value, else "unknown".

        Args:
            headers: Request headers (case-insensitive mapping)

        Returns:
            The rate-limit key for the client
        """
        for name in CLIENT_IP_HEADERS:
            value = headers.get(name)
            if value:
                return value
        return UNKNOWN_CLIENT

    def check(self, headers: Mapping[str, str]) -> RateLimitDecisionEntity:
        """Count the request against its client's quota.

        Args:
            headers: Request headers

        Returns:
            The limiter's decision
        """
        decision = self._limiter.limit(self.client_key(headers))
        if not decision.success:
            logger.info("Rate limit exceeded for %s (%d/%d)", decision.key, decision.count, decision.limit)
        return decision

    @property
    def retry_after(self) -> int:
        """Get the Retry-After value in seconds."""
        return self._retry_after
