"""Stored record domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredRecordEntity:
    """A single key/value pair held by the key-value store.

    Attributes:
        key: Storage identifier, unique within the store
        value: The stored string value (last write wins)
    """

    key: str
    value: str
