"""Authentication and authorization exceptions for storefront-admin."""

from typing import Any, Dict, Optional

from .base import StorefrontError


class AuthenticationError(StorefrontError):
    """No, expired or invalid session.

    ``clear_session`` marks a rejected session cookie that the error
    response must delete.
    """

    default_code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Authentication required", clear_session: bool = False, **kwargs):
        super().__init__(message, **kwargs)
        self.clear_session = clear_session


class PermissionDeniedError(StorefrontError):
    """Authenticated, but the role holds no satisfying grant."""

    default_code = "PERMISSION_DENIED"

    def __init__(
        self,
        message: Optional[str] = None,
        resource: Optional[str] = None,
        action: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        action_value = getattr(action, "value", action)
        if message is None:
            if resource and action_value:
                message = f"You do not have permission to {action_value.lower()} {resource}"
            else:
                message = "You do not have permission to perform this action"
        details = dict(details or {})
        if resource:
            details.setdefault("resource", resource)
        if action_value:
            details.setdefault("action", action_value)
        super().__init__(message, details=details, **kwargs)
        self.resource = resource
        self.action = action_value
