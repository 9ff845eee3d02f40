"""Role management service.

Every call is guarded by the ``roles`` resource. Updates and deletions emit
awaited events so that cached permission sets are gone before the caller
gets a response.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ....config.constants import PermissionAction, ROLES_RESOURCE
from ....core.exceptions import ConflictError, NotFoundError, ValidationError
from ...events.entities import EventMeta, EventName, RoleEvent
from ..entities import Role, RoleRepository, PermissionRepository, is_valid_role_name
from .authorization_service import ensure_permission

logger = logging.getLogger(__name__)

PROTECTED_SYSTEM_FIELDS = ("name", "display_name", "description")
UPDATABLE_FIELDS = ("name", "display_name", "description")


class RoleService:
    """Service orchestrating role CRUD with guards and events."""

    def __init__(
        self,
        role_repo: RoleRepository,
        permission_repo: PermissionRepository,
        event_bus,
    ):
        self.role_repo = role_repo
        self.permission_repo = permission_repo
        self.event_bus = event_bus

    async def list_roles(self, actor) -> List[Role]:
        ensure_permission(actor, ROLES_RESOURCE, PermissionAction.READ)
        return await self.role_repo.list_all()

    async def get_role(self, actor, role_id: str) -> Role:
        ensure_permission(actor, ROLES_RESOURCE, PermissionAction.READ)
        role = await self.role_repo.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Role", role_id)
        return role

    async def _check_permission_ids(self, permission_ids: Sequence[str]) -> List[str]:
        unique_ids = list(dict.fromkeys(permission_ids))
        if not unique_ids:
            return unique_ids
        found = await self.permission_repo.get_by_ids(unique_ids)
        known = {permission.id for permission in found}
        missing = [pid for pid in unique_ids if pid not in known]
        if missing:
            raise ValidationError(
                f"Unknown permissions: {', '.join(missing)}", field="permission_ids"
            )
        return unique_ids

    async def create_role(
        self,
        actor,
        name: str,
        display_name: str,
        description: Optional[str] = None,
        permission_ids: Sequence[str] = (),
    ) -> Role:
        ensure_permission(actor, ROLES_RESOURCE, PermissionAction.CREATE)

        if not is_valid_role_name(name):
            raise ValidationError(
                "Role name must be lower case letters, digits and underscores", field="name"
            )
        if not display_name:
            raise ValidationError("Display name is required", field="display_name")
        if await self.role_repo.get_by_name(name):
            raise ConflictError(f"Role {name} already exists", field="name")

        permission_ids = await self._check_permission_ids(permission_ids)
        role = await self.role_repo.create(
            Role(id=None, name=name, display_name=display_name, description=description),
            permission_ids,
        )
        logger.info(f"Role {role.name} created by {actor.id}")

        self.event_bus.emit(
            EventName.ROLE_CREATED,
            RoleEvent(id=role.id, name=role.name, meta=EventMeta(user_id=actor.id)),
        )
        return role

    async def update_role(
        self,
        actor,
        role_id: str,
        changes: Dict[str, Any],
        permission_ids: Optional[Sequence[str]] = None,
    ) -> Role:
        """Apply field changes and optionally replace the permission set.

        System roles keep their name, display name and description; only
        their permission set may change.
        """
        ensure_permission(actor, ROLES_RESOURCE, PermissionAction.UPDATE)

        role = await self.role_repo.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Role", role_id)

        changes = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS and v is not None}

        if role.is_system:
            blocked = [f for f in PROTECTED_SYSTEM_FIELDS if f in changes and changes[f] != getattr(role, f)]
            if blocked:
                raise ValidationError(
                    "System role name, display name and description cannot change",
                    field=blocked[0],
                )

        new_name = changes.get("name")
        if new_name and new_name != role.name:
            if not is_valid_role_name(new_name):
                raise ValidationError(
                    "Role name must be lower case letters, digits and underscores", field="name"
                )
            existing = await self.role_repo.get_by_name(new_name)
            if existing and existing.id != role.id:
                raise ConflictError(f"Role {new_name} already exists", field="name")

        if permission_ids is not None:
            permission_ids = await self._check_permission_ids(permission_ids)

        updated = await self.role_repo.update(role_id, changes, permission_ids)
        if updated is None:
            raise NotFoundError("Role", role_id)
        logger.info(f"Role {updated.name} updated by {actor.id}")

        await self.event_bus.emit_awaited(
            EventName.ROLE_UPDATED,
            RoleEvent(id=updated.id, name=updated.name, meta=EventMeta(user_id=actor.id)),
        )
        return updated

    async def delete_role(self, actor, role_id: str) -> None:
        ensure_permission(actor, ROLES_RESOURCE, PermissionAction.DELETE)

        role = await self.role_repo.get_by_id(role_id)
        if role is None:
            raise NotFoundError("Role", role_id)
        if role.is_system:
            raise ValidationError("System roles cannot be deleted")
        if role.user_count > 0:
            raise ValidationError(
                f"Role is still assigned to {role.user_count} user(s)",
                details={"user_count": role.user_count},
            )

        if not await self.role_repo.delete(role_id):
            raise NotFoundError("Role", role_id)
        logger.info(f"Role {role.name} deleted by {actor.id}")

        await self.event_bus.emit_awaited(
            EventName.ROLE_DELETED,
            RoleEvent(id=role.id, name=role.name, meta=EventMeta(user_id=actor.id)),
        )

