"""Auth repositories package."""

from .session_repository import AsyncPGSessionRepository
from .user_repository import AsyncPGUserRepository

__all__ = [
    "AsyncPGSessionRepository",
    "AsyncPGUserRepository",
]
