"""Users feature."""

from .services import UserService

__all__ = ["UserService"]
