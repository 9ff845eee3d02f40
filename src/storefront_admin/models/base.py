"""
Base models for API requests and responses.
"""
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
        populate_by_name=True,
    )


class APIResponse(BaseSchema, Generic[T]):
    """Standard API response wrapper."""
    success: bool = Field(description="Operation success flag")
    data: Optional[T] = Field(None, description="Response data")
    message: Optional[str] = Field(None, description="Response message")
    meta: Optional[Dict[str, Any]] = Field(None, description="Additional metadata")

    @classmethod
    def success_response(
        cls,
        data: Optional[T] = None,
        message: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> "APIResponse[T]":
        """Create a success response."""
        return cls(success=True, data=data, message=message, meta=meta)


class ErrorBody(BaseSchema):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    type: str


class ErrorResponse(BaseSchema):
    """Envelope rendered for every failed request."""
    error: ErrorBody


__all__ = [
    "BaseSchema",
    "APIResponse",
    "ErrorBody",
    "ErrorResponse",
]
