"""Key-value service for the bulk read and single write operations.

This service orchestrates store calls. It has no caching or rate limiting
of its own; the handler layer coordinates those around it.
"""

import logging

from cached_kv.entities import StoredRecordEntity
from cached_kv.protocols import KVStore

logger = logging.getLogger(__name__)


class KVService:
    """Core key-value orchestration service.

    This service depends on the KVStore PROTOCOL, not a concrete
    implementation, so Redis and in-memory stores are interchangeable.

    Example:
        ```python
        from cached_kv.repositories import InMemoryKVStore
        from cached_kv.services import KVService

        kv = KVService.create(store=InMemoryKVStore())
        kv.put_record("a", "1")
        kv.read_all()  # {"a": "1"}
        ```
    """

    def __init__(self, store: KVStore, list_limit: int | None = None) -> None:
        """Initialize the key-value service.

        Args:
            store: Key-value storage backend (required).
            list_limit: Listing cap of the store. When a listing comes back
                this long, a truncation warning is logged.
        """
        self._store = store
        self._list_limit = list_limit

    @classmethod
    def create(cls, store: KVStore, list_limit: int | None = None) -> "KVService":
        """Factory method to create KVService.

        Args:
            store: Key-value storage backend (required).
            list_limit: Listing cap of the store, if known.

        Returns:
            Configured KVService instance
        """
        return cls(store=store, list_limit=list_limit)

    def list_records(self) -> list[StoredRecordEntity]:
        """Read every listed record.

        Business logic:
        1. List keys in one unpaginated call
        2. Read each key individually
        3. Skip keys whose value is gone (deleted between list and get)

        Returns:
            Records in listing order
        """
        keys = self._store.list_keys()
        if self._list_limit is not None and len(keys) >= self._list_limit:
            logger.warning(
                "Key listing returned %d keys (limit %d); later keys are not included",
                len(keys),
                self._list_limit,
            )

        records = []
        for key in keys:
            value = self._store.get(key)
            if value is None:
                continue
            records.append(StoredRecordEntity(key=key, value=value))
        return records

    def read_all(self) -> dict[str, str]:
        """Read every listed record as a flat mapping in listing order."""
        return {record.key: record.value for record in self.list_records()}

    def put_record(self, key: str, value: str) -> StoredRecordEntity:
        """Write a record, overwriting any previous value.

        Args:
            key: The key to write
            value: The value to store

        Returns:
            The written record
        """
        self._store.put(key, value)
        logger.debug("Stored key %r", key)
        return StoredRecordEntity(key=key, value=value)

    def is_healthy(self) -> bool:
        """Check if the underlying store is reachable."""
        return self._store.health_check()

    @property
    def store(self) -> KVStore:
        """Get the underlying store (for testing)."""
        return self._store
