"""Auth API models."""

from .request import LoginRequest, RegisterRequest
from .response import GrantSchema, RoleSummary, UserProfile

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "GrantSchema",
    "RoleSummary",
    "UserProfile",
]
