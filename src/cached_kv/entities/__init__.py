"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic beyond plain dict conversion
- No Pydantic validation
- No external dependencies
"""

from .cached_response import CachedResponseEntity
from .rate_limit_decision import RateLimitDecisionEntity
from .stored_record import StoredRecordEntity

__all__ = ["CachedResponseEntity", "RateLimitDecisionEntity", "StoredRecordEntity"]
