"""Authorization guard.

``has_permission`` is a pure decision over a user's role and grants.
``AuthorizationService`` combines it with session resolution so callers get
one of three outcomes: the user, ``AuthenticationError`` or
``PermissionDeniedError``.
"""

import logging
from typing import Optional

from ....config.constants import (
    PermissionAction,
    PermissionScope,
    ROLES_RESOURCE,
    SUPER_ADMIN_ROLE,
)
from ....core.exceptions import AuthenticationError, PermissionDeniedError

logger = logging.getLogger(__name__)


def has_permission(
    user,
    resource: str,
    action: PermissionAction,
    scope: PermissionScope = PermissionScope.ALL,
) -> bool:
    """Decide whether ``user`` may perform ``action`` on ``resource``.

    Rules, in order:
        1. no role -> deny
        2. super_admin -> allow
        3. a grant for the exact action whose scope satisfies the request
        4. a MANAGE grant on the resource whose scope satisfies the request
        5. deny

    ALL satisfies an OWN request; OWN never satisfies ALL.
    """
    role = getattr(user, "role", None) if user is not None else None
    if role is None:
        return False

    if role.name == SUPER_ADMIN_ROLE:
        return True

    action = PermissionAction(action)
    scope = PermissionScope(scope)

    manage_grant = False
    for grant in role.grants:
        if grant.resource != resource or not grant.satisfies_scope(scope):
            continue
        if grant.action == action:
            return True
        if grant.action == PermissionAction.MANAGE:
            manage_grant = True

    return manage_grant


def can_assign_role(actor, target_role_name: str) -> bool:
    """Only super_admin may hand out super_admin; anyone else needs roles UPDATE."""
    role = getattr(actor, "role", None) if actor is not None else None
    if role is None:
        return False

    if role.name == SUPER_ADMIN_ROLE:
        return True

    if target_role_name == SUPER_ADMIN_ROLE:
        return False

    return has_permission(actor, ROLES_RESOURCE, PermissionAction.UPDATE)


def ensure_permission(
    user,
    resource: str,
    action: PermissionAction,
    scope: PermissionScope = PermissionScope.ALL,
) -> None:
    """Raise ``PermissionDeniedError`` when ``has_permission`` denies."""
    if not has_permission(user, resource, action, scope):
        logger.info(
            f"Permission denied for user {getattr(user, 'id', None)}: "
            f"{resource}:{PermissionAction(action).value}:{PermissionScope(scope).value}"
        )
        raise PermissionDeniedError(resource=resource, action=PermissionAction(action).value)


def assert_owner(user, owner_id: Optional[str], resource: str, action: PermissionAction) -> None:
    """Enforce an OWN-scoped grant against a concrete resource.

    Holders of the ALL scope pass regardless of ownership; everyone else
    must own the resource.
    """
    if has_permission(user, resource, action, PermissionScope.ALL):
        return
    if has_permission(user, resource, action, PermissionScope.OWN) and owner_id == user.id:
        return
    raise PermissionDeniedError(resource=resource, action=PermissionAction(action).value)


class AuthorizationService:
    """Session-aware permission gate.

    Resolution is repeated on every call; nothing is memoized between
    requests.
    """

    def __init__(self, session_service):
        self.session_service = session_service

    async def require_user(self, token: Optional[str], response=None):
        user = await self.session_service.resolve_session(token, response)
        if user is None:
            raise AuthenticationError(clear_session=bool(token))
        return user

    async def require_permission(
        self,
        token: Optional[str],
        resource: str,
        action: PermissionAction,
        scope: PermissionScope = PermissionScope.ALL,
        response=None,
    ):
        """Resolve the session and check one permission.

        Raises:
            AuthenticationError: no valid session
            PermissionDeniedError: session valid but no satisfying grant
        """
        user = await self.require_user(token, response)
        ensure_permission(user, resource, action, scope)
        return user
