"""Redis implementation of KVStore.

Each record is a plain Redis string under ``<namespace>:<key>``.
It's the default implementation and satisfies the KVStore protocol.
"""

import redis

from cached_kv.config import get_redis_client, settings


class RedisKVStore:
    """Redis-backed key-value store.

    This class satisfies the KVStore protocol through structural
    typing - no explicit inheritance needed.

    Listing mirrors a managed key-value namespace: keys come back in
    lexicographic order and one call returns at most ``list_limit`` keys.
    There is no cursor; anything past the limit is not listed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
        list_limit: int | None = None,
    ) -> None:
        """Initialize the Redis key-value store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            namespace: Prefix for stored keys. Defaults to settings.
            list_limit: Max keys returned by list_keys(). Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace or settings.kv_namespace
        self._list_limit = list_limit or settings.kv_list_limit

    @classmethod
    def create(
        cls,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
        list_limit: int | None = None,
    ) -> "RedisKVStore":
        """Factory method to create RedisKVStore with defaults.

        Args:
            redis_client: Redis client. If None, uses settings.
            namespace: Key prefix. If None, uses settings.
            list_limit: Listing cap. If None, uses settings.

        Returns:
            Configured RedisKVStore
        """
        return cls(redis_client=redis_client, namespace=namespace, list_limit=list_limit)

    def _storage_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def list_keys(self) -> list[str]:
        """List stored key names.

        Returns:
            Up to list_limit key names, sorted lexicographically
        """
        prefix = f"{self._namespace}:"
        keys = []
        for storage_key in self._client.scan_iter(match=f"{prefix}*"):
            if isinstance(storage_key, bytes):
                storage_key = storage_key.decode()
            keys.append(storage_key[len(prefix):])
        keys.sort()
        return keys[: self._list_limit]

    def get(self, key: str) -> str | None:
        """Read a single value.

        Args:
            key: The key to read

        Returns:
            The stored value, or None if the key does not exist
        """
        value = self._client.get(self._storage_key(key))
        if isinstance(value, bytes):
            return value.decode()
        return value  # type: ignore[return-value]

    def put(self, key: str, value: str) -> None:
        """Write a value, overwriting any previous one.

        Args:
            key: The key to write
            value: The value to store
        """
        self._client.set(self._storage_key(key), value)

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
