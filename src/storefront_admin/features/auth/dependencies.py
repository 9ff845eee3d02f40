"""FastAPI authentication dependencies."""

import logging
from typing import Optional

from fastapi import Depends, Request, Response

from ...config.constants import PermissionAction, PermissionScope
from ...core.exceptions import AuthenticationError
from .entities import AuthenticatedUser

logger = logging.getLogger(__name__)


def get_services(request: Request):
    """The service container built at application startup."""
    return request.app.state.services


def get_session_token(request: Request, services=Depends(get_services)) -> Optional[str]:
    return services.session_cookie.read(request)


async def get_optional_user(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    services=Depends(get_services),
) -> Optional[AuthenticatedUser]:
    """Current user if a valid session cookie was sent."""
    return await services.session_service.resolve_session(token, response)


async def get_current_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    token: Optional[str] = Depends(get_session_token),
) -> AuthenticatedUser:
    """Current user; raises ``AuthenticationError`` without a valid session."""
    if user is None:
        raise AuthenticationError(clear_session=bool(token))
    return user


def require_permission(
    resource: str,
    action: PermissionAction,
    scope: PermissionScope = PermissionScope.ALL,
):
    """Dependency factory guarding an endpoint with one permission."""

    async def dependency(
        response: Response,
        token: Optional[str] = Depends(get_session_token),
        services=Depends(get_services),
    ) -> AuthenticatedUser:
        return await services.authorization.require_permission(
            token, resource, action, scope, response
        )

    return dependency
