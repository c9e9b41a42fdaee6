"""Key-value store protocol.

Defines the interface for the flat string-to-string store the read and
write paths share.

Implementations can include:
- Redis (default)
- In-memory dict (local development and tests)
- Any managed key-value namespace with list/get/put calls
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KVStore(Protocol):
    """Protocol for key-value storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def list_keys(self) -> list[str]:
        """List stored key names in one unpaginated call.

        Returns:
            Key names in the backend's listing order. Implementations may cap
            the number of keys returned.
        """
        ...

    def get(self, key: str) -> str | None:
        """Read a single value.

        Args:
            key: The key to read

        Returns:
            The stored value, or None if the key does not exist
        """
        ...

    def put(self, key: str, value: str) -> None:
        """Write a value, overwriting any previous one.

        Args:
            key: The key to write
            value: The value to store
        """
        ...

    def health_check(self) -> bool:
        """Check if the store is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
