"""Auth request models."""

from typing import Optional

from pydantic import Field

from ....models.base import BaseSchema


class LoginRequest(BaseSchema):
    """Request model for email/password login."""

    email: Optional[str] = Field(None, description="Account email")
    password: Optional[str] = Field(None, description="Password")


class RegisterRequest(BaseSchema):
    """Request model for customer self-registration."""

    email: Optional[str] = Field(None, description="Account email")
    password: Optional[str] = Field(None, description="Password, at least 8 characters")
    first_name: str = Field("", max_length=100, description="Given name")
    last_name: str = Field("", max_length=100, description="Family name")
    phone: Optional[str] = Field(None, description="Vietnamese mobile number")
