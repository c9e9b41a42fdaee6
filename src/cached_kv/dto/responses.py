"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class SetValueResponse(BaseModel):
    """Response DTO for a successful write."""

    success: bool = Field(True, description="Whether the write succeeded")
    key: str = Field(..., description="The key that was written")
    value: str = Field(..., description="The value that was stored")


class ErrorResponse(BaseModel):
    """Response DTO for rate limit and validation errors."""

    error: str = Field(..., description="Short error name")
    message: str | None = Field(None, description="Human-readable explanation")
