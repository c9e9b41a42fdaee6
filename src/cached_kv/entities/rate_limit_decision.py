"""Rate limit decision domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecisionEntity:
    """Outcome of one rate limiter check.

    Attributes:
        key: The client identifier the check was made for
        success: True if the request is within the limit
        count: Requests counted for the key in the current window
        limit: Threshold the count was compared against
    """

    key: str
    success: bool
    count: int = 0
    limit: int = 0
