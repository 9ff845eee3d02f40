"""Administrative user operations.

Deleting a user is a soft delete: the row stays, marked deleted and
inactive, and every session it holds is revoked at once.
"""

import logging
from typing import Optional, Tuple

from ....config.constants import PermissionAction, SUPER_ADMIN_ROLE
from ....core.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from ...auth.entities import PasswordHasher, UserRecord, UserRepository
from ...auth.entities.validation import check_password
from ...events.entities import EventMeta, EventName, UserEvent
from ...permissions.entities import Role
from ...permissions.services import can_assign_role, ensure_permission

logger = logging.getLogger(__name__)

USERS_RESOURCE = "users"


class UserService:
    """Service for user lifecycle changes made by administrators."""

    def __init__(
        self,
        user_repo: UserRepository,
        role_repo,
        session_service,
        hasher: PasswordHasher,
        event_bus,
        password_min_length: int = 8,
    ):
        self.user_repo = user_repo
        self.role_repo = role_repo
        self.session_service = session_service
        self.hasher = hasher
        self.event_bus = event_bus
        self.password_min_length = password_min_length

    async def _load_live_user(self, user_id: str) -> Tuple[UserRecord, Optional[Role]]:
        loaded = await self.user_repo.find_with_role(user_id)
        if loaded is None or loaded[0].is_deleted:
            raise NotFoundError("User", user_id)
        return loaded

    def _guard_super_admin_target(self, actor, role: Optional[Role], action: PermissionAction) -> None:
        if role is not None and role.name == SUPER_ADMIN_ROLE and actor.role_name != SUPER_ADMIN_ROLE:
            raise PermissionDeniedError(
                "Only a super admin can change a super admin account",
                resource=USERS_RESOURCE,
                action=action,
            )

    def _emit(self, name: EventName, record: UserRecord, actor) -> None:
        self.event_bus.emit(
            name, UserEvent(id=record.id, email=record.email, meta=EventMeta(user_id=actor.id))
        )

    async def soft_delete_user(self, actor, user_id: str) -> None:
        """Soft-delete a user and revoke all of its sessions.

        Raises:
            PermissionDeniedError: actor lacks ``users`` DELETE
            NotFoundError: no live user with this id
            ValidationError: target is a super admin or the actor itself
        """
        ensure_permission(actor, USERS_RESOURCE, PermissionAction.DELETE)

        record, role = await self._load_live_user(user_id)
        if role is not None and role.name == SUPER_ADMIN_ROLE:
            raise ValidationError("Cannot delete a super admin user")
        if record.id == actor.id:
            raise ValidationError("Cannot delete your own account")

        await self.user_repo.soft_delete(record.id, self.session_service.now())
        revoked = await self.session_service.destroy_all_sessions(record.id)
        logger.info(f"User {record.id} deleted by {actor.id}; {revoked} session(s) revoked")

        self._emit(EventName.USER_DELETED, record, actor)

    async def assign_role(self, actor, user_id: str, role_id: str) -> Role:
        ensure_permission(actor, USERS_RESOURCE, PermissionAction.UPDATE)

        record, current_role = await self._load_live_user(user_id)
        self._guard_super_admin_target(actor, current_role, PermissionAction.UPDATE)

        target_role = await self.role_repo.get_by_id(role_id)
        if target_role is None:
            raise NotFoundError("Role", role_id)

        if not can_assign_role(actor, target_role.name):
            raise PermissionDeniedError(
                f"You cannot assign the {target_role.name} role",
                resource="roles",
                action=PermissionAction.UPDATE,
            )

        if record.role_id != target_role.id:
            await self.user_repo.update_role(record.id, target_role.id)
            logger.info(f"User {record.id} moved to role {target_role.name} by {actor.id}")
            self._emit(EventName.USER_UPDATED, record, actor)
        return target_role

    async def set_password(self, actor, user_id: str, password: str) -> None:
        """Replace a user's credential and sign it out everywhere."""
        ensure_permission(actor, USERS_RESOURCE, PermissionAction.UPDATE)
        check_password(password, self.password_min_length)

        record, role = await self._load_live_user(user_id)
        self._guard_super_admin_target(actor, role, PermissionAction.UPDATE)

        await self.user_repo.update_password(record.id, self.hasher.hash(password))
        await self.session_service.destroy_all_sessions(record.id)
        logger.info(f"Password for user {record.id} reset by {actor.id}")

        self._emit(EventName.USER_UPDATED, record, actor)
