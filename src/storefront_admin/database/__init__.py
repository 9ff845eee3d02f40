"""Database access for storefront-admin."""

from .connection import DatabaseManager, parse_command_count

__all__ = ["DatabaseManager", "parse_command_count"]
