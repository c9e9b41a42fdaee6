"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field, StrictStr


class SetValueRequest(BaseModel):
    """Request DTO for POST /set.

    Both fields must be non-empty strings. Extra fields are ignored.
    """

    key: StrictStr = Field(..., description="Storage key to write", min_length=1)
    value: StrictStr = Field(..., description="Value to store under the key", min_length=1)
