"""Protocol interfaces for the permissions feature.

Defines the data access contracts the role and permission services depend
on. Implementations must treat a role update that replaces the permission
set as one all-or-nothing write.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from .permission import Permission, PermissionKey
from .role import Role


@runtime_checkable
class PermissionRepository(Protocol):
    """Protocol for permission data access operations."""

    @abstractmethod
    async def list_all(self) -> List[Permission]:
        """List every permission ordered by group, resource and action."""
        ...

    @abstractmethod
    async def get_by_ids(self, permission_ids: Sequence[str]) -> List[Permission]:
        """Get the permissions with the given ids; unknown ids are skipped."""
        ...

    @abstractmethod
    async def upsert(self, permission: Permission) -> Permission:
        """Insert or update a permission keyed by (resource, action, scope)."""
        ...


@runtime_checkable
class RoleRepository(Protocol):
    """Protocol for role data access operations."""

    @abstractmethod
    async def get_by_id(self, role_id: str) -> Optional[Role]:
        """Get a role with its grants and user count."""
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get a role by its unique name."""
        ...

    @abstractmethod
    async def get_default(self) -> Optional[Role]:
        """Get the role assigned to self-registered users."""
        ...

    @abstractmethod
    async def list_all(self) -> List[Role]:
        """List all roles with their grants and user counts."""
        ...

    @abstractmethod
    async def create(self, role: Role, permission_ids: Sequence[str] = ()) -> Role:
        """Create a role together with its initial permission set."""
        ...

    @abstractmethod
    async def update(
        self,
        role_id: str,
        changes: Dict[str, Any],
        permission_ids: Optional[Sequence[str]] = None
    ) -> Optional[Role]:
        """Apply field changes and, when given, replace the whole permission set atomically."""
        ...

    @abstractmethod
    async def delete(self, role_id: str) -> bool:
        """Delete a role; its permission links go with it."""
        ...

    @abstractmethod
    async def sync_by_name(self, role: Role, permission_keys: Sequence[PermissionKey]) -> Role:
        """Upsert a role by name and replace its grants with the given keys."""
        ...
