"""Auth entities package.

Credentials, sessions, users and the repository protocols they rely on.
"""

from .credential import PasswordHasher, hash_password, verify_password
from .session import Session, ClientMeta, generate_session_token, mask_token
from .user import UserRecord, AuthenticatedUser
from .protocols import SessionRepository, UserRepository

__all__ = [
    # Credentials
    "PasswordHasher",
    "hash_password",
    "verify_password",

    # Sessions
    "Session",
    "ClientMeta",
    "generate_session_token",
    "mask_token",

    # Users
    "UserRecord",
    "AuthenticatedUser",

    # Protocols
    "SessionRepository",
    "UserRepository",
]
