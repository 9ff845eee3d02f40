"""Auth feature.

Password credentials, cookie sessions and the login/registration flows.
"""

from .entities import (
    PasswordHasher,
    hash_password,
    verify_password,
    Session,
    ClientMeta,
    UserRecord,
    AuthenticatedUser,
    SessionRepository,
    UserRepository,
)
from .cookies import SessionCookie
from .services import SessionService, AuthService

__all__ = [
    # Entities
    "PasswordHasher",
    "hash_password",
    "verify_password",
    "Session",
    "ClientMeta",
    "UserRecord",
    "AuthenticatedUser",
    "SessionRepository",
    "UserRepository",

    # Services
    "SessionCookie",
    "SessionService",
    "AuthService",
]
