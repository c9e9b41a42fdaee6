"""Response cache service for the cache-aside read path."""

import logging
import re

from cached_kv.entities import CachedResponseEntity
from cached_kv.protocols import ResponseCache

logger = logging.getLogger(__name__)

_MAX_AGE = re.compile(r"(?:^|,)\s*max-age\s*=\s*(\d+)", re.IGNORECASE)


def max_age(headers: dict[str, str]) -> int | None:
    """Extract max-age (seconds) from a Cache-Control header, if any."""
    for name, value in headers.items():
        if name.lower() == "cache-control":
            found = _MAX_AGE.search(value)
            if found:
                return int(found.group(1))
    return None


class ResponseCacheService:
    """Looks up and stores response snapshots by request identity.

    Entries are never invalidated by writes; they only expire. The
    freshness window comes from the snapshot's own Cache-Control max-age,
    falling back to the configured default TTL.
    """

    def __init__(self, cache: ResponseCache, default_ttl: int = 60) -> None:
        """Initialize the response cache service.

        Args:
            cache: Response cache backend (required).
            default_ttl: Freshness window when a snapshot has no max-age.
        """
        self._cache = cache
        self._default_ttl = default_ttl

    @classmethod
    def create(cls, cache: ResponseCache, default_ttl: int = 60) -> "ResponseCacheService":
        """Factory method to create ResponseCacheService."""
        return cls(cache=cache, default_ttl=default_ttl)

    @staticmethod
    def identity(method: str, url: str) -> str:
        """Build the cache lookup key from the request method and full URL."""
        return f"{method.upper()} {url}"

    def lookup(self, identity: str) -> CachedResponseEntity | None:
        """Return the cached snapshot for the identity, or None on a miss."""
        entry = self._cache.match(identity)
        logger.debug("Response cache %s for %s", "hit" if entry else "miss", identity)
        return entry

    def ttl_for(self, entry: CachedResponseEntity) -> int:
        """Freshness window of a snapshot in seconds."""
        age = max_age(entry.headers)
        return age if age is not None else self._default_ttl

    def store(self, identity: str, entry: CachedResponseEntity) -> bool:
        """Store a snapshot, best effort.

        Runs detached from the request, so failures are logged and
        swallowed instead of raised.

        Returns:
            True if the snapshot was stored, False otherwise
        """
        try:
            self._cache.put(identity, entry, self.ttl_for(entry))
        except Exception as e:
            logger.warning("Failed to populate response cache for %s: %s", identity, e)
            return False
        return True

    @property
    def default_ttl(self) -> int:
        """Get the fallback freshness window."""
        return self._default_ttl
