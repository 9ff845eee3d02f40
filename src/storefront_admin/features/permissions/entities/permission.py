"""Permission domain entities for the permissions feature.

A permission is the atomic grant unit: a ``(resource, action, scope)``
triple plus a human label and grouping tag. Maps to the ``permissions``
table; ``Grant`` is the resolved form attached to a role through
``role_permissions`` (which may override the scope).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from ....config.constants import PermissionAction, PermissionScope


PermissionKey = Tuple[str, PermissionAction, PermissionScope]


@dataclass(frozen=True)
class Grant:
    """A concrete (resource, action, scope) permission bound to a role."""

    resource: str
    action: PermissionAction
    scope: PermissionScope = PermissionScope.ALL

    def __post_init__(self):
        object.__setattr__(self, "action", PermissionAction(self.action))
        object.__setattr__(self, "scope", PermissionScope(self.scope))

    def satisfies_scope(self, requested: PermissionScope) -> bool:
        """ALL satisfies any request, OWN only satisfies OWN."""
        return self.scope == PermissionScope.ALL or self.scope == requested

    def to_dict(self) -> Dict[str, str]:
        return {
            "resource": self.resource,
            "action": self.action.value,
            "scope": self.scope.value,
        }

    def __str__(self) -> str:
        return f"{self.resource}:{self.action.value}:{self.scope.value}"


@dataclass
class Permission:
    """Domain entity representing one grantable permission."""

    id: Optional[str]
    resource: str
    action: PermissionAction
    scope: PermissionScope
    name: str
    description: Optional[str] = None
    group: Optional[str] = None
    is_system: bool = False
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.resource:
            raise ValueError("Permission resource cannot be empty")
        self.action = PermissionAction(self.action)
        self.scope = PermissionScope(self.scope)

    @property
    def key(self) -> PermissionKey:
        """Unique identity of the permission."""
        return (self.resource, self.action, self.scope)

    def as_grant(self, scope_override: Optional[PermissionScope] = None) -> Grant:
        """Resolve into a grant, letting a role-level scope override win."""
        return Grant(self.resource, self.action, scope_override or self.scope)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "resource": self.resource,
            "action": self.action.value,
            "scope": self.scope.value,
            "name": self.name,
            "description": self.description,
            "group": self.group,
        }

    def __repr__(self) -> str:
        return f"Permission({self.resource}:{self.action.value}:{self.scope.value})"
