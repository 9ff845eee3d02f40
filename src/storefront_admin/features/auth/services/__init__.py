"""Auth services package."""

from .session_service import SessionService, DEFAULT_SESSION_TTL
from .auth_service import AuthService

__all__ = [
    "SessionService",
    "DEFAULT_SESSION_TTL",
    "AuthService",
]
