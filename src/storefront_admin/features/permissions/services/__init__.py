"""Permission services package."""

from .authorization_service import (
    has_permission,
    can_assign_role,
    ensure_permission,
    assert_owner,
    AuthorizationService,
)
from .role_service import RoleService
from .permission_service import PermissionService

__all__ = [
    # Guard
    "has_permission",
    "can_assign_role",
    "ensure_permission",
    "assert_owner",
    "AuthorizationService",

    # Services
    "RoleService",
    "PermissionService",
]
