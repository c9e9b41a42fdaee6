"""Cached response domain entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CachedResponseEntity:
    """Snapshot of an HTTP response held by the response cache.

    Attributes:
        status_code: HTTP status code of the snapshot
        headers: Response headers as they were when the snapshot was taken
        body: Response body text, returned unchanged on a cache hit
        stored_at: Unix timestamp when the snapshot was taken
    """

    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)
    stored_at: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "stored_at": self.stored_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CachedResponseEntity":
        return cls(
            status_code=int(data["status_code"]),
            body=data["body"],
            headers=dict(data.get("headers", {})),
            stored_at=float(data.get("stored_at", 0.0)),
        )
