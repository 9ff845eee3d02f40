"""Permissions feature.

Role-based access control over ``(resource, action, scope)`` grants:
entities, the default catalog, the authorization guard and role
management.
"""

from .entities import Permission, Grant, Role, PermissionRepository, RoleRepository
from .catalog import RESOURCES, DEFAULT_ROLES, build_permission_catalog
from .services import (
    has_permission,
    can_assign_role,
    ensure_permission,
    assert_owner,
    AuthorizationService,
    RoleService,
    PermissionService,
)
from .repositories import AsyncPGPermissionRepository, AsyncPGRoleRepository

__all__ = [
    # Entities
    "Permission",
    "Grant",
    "Role",
    "PermissionRepository",
    "RoleRepository",

    # Catalog
    "RESOURCES",
    "DEFAULT_ROLES",
    "build_permission_catalog",

    # Services
    "has_permission",
    "can_assign_role",
    "ensure_permission",
    "assert_owner",
    "AuthorizationService",
    "RoleService",
    "PermissionService",

    # Repositories
    "AsyncPGPermissionRepository",
    "AsyncPGRoleRepository",
]
