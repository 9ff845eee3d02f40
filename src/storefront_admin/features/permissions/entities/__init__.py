"""Permission entities package.

Domain entities and protocols for permission and role management.
"""

from .permission import Permission, Grant, PermissionKey
from .role import Role, is_valid_role_name
from .protocols import PermissionRepository, RoleRepository

__all__ = [
    # Domain entities
    "Permission",
    "Grant",
    "PermissionKey",
    "Role",
    "is_valid_role_name",

    # Protocols
    "PermissionRepository",
    "RoleRepository",
]
