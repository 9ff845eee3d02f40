"""Permission repositories package."""

from .permission_repository import AsyncPGPermissionRepository
from .role_repository import AsyncPGRoleRepository

__all__ = [
    "AsyncPGPermissionRepository",
    "AsyncPGRoleRepository",
]
