"""Response cache protocol."""

from typing import Protocol, runtime_checkable

from cached_kv.entities import CachedResponseEntity


@runtime_checkable
class ResponseCache(Protocol):
    """Protocol for HTTP response caches keyed by request identity."""

    def match(self, identity: str) -> CachedResponseEntity | None:
        """Look up a non-expired response snapshot.

        Args:
            identity: Request identity (method and full URL)

        Returns:
            The cached snapshot, or None on a miss or after expiry
        """
        ...

    def put(self, identity: str, entry: CachedResponseEntity, ttl: int) -> None:
        """Store a response snapshot.

        Args:
            identity: Request identity (method and full URL)
            entry: The snapshot to store
            ttl: Freshness window in seconds
        """
        ...
