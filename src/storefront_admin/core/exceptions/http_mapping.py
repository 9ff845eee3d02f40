"""HTTP status code mapping for exceptions."""

from typing import Any, Dict

from .auth import AuthenticationError, PermissionDeniedError
from .base import StorefrontError
from .domain import (
    CacheError,
    ConflictError,
    DatabaseError,
    EventHandlingError,
    InternalError,
    NotFoundError,
    ValidationError,
)


HTTP_STATUS_MAP = {
    # 400 Bad Request
    ValidationError: 400,

    # 401 Unauthorized
    AuthenticationError: 401,

    # 403 Forbidden
    PermissionDeniedError: 403,

    # 404 Not Found
    NotFoundError: 404,

    # 409 Conflict
    ConflictError: 409,

    # 500 Internal Server Error
    InternalError: 500,
    DatabaseError: 500,
    CacheError: 500,
    EventHandlingError: 500,

    # Default for StorefrontError
    StorefrontError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception, walking its class hierarchy."""
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500


def create_error_response(exception: StorefrontError) -> Dict[str, Any]:
    """Wrap an error in the ``{"error": ...}`` envelope."""
    return {"error": exception.to_dict()}
