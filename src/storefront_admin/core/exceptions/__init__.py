"""Exception hierarchy for storefront-admin."""

from .base import StorefrontError
from .auth import AuthenticationError, PermissionDeniedError
from .domain import (
    FieldError,
    ValidationError,
    NotFoundError,
    ConflictError,
    InternalError,
    DatabaseError,
    CacheError,
    EventHandlingError,
)
from .http_mapping import HTTP_STATUS_MAP, create_error_response, get_http_status_code

__all__ = [
    # Base
    "StorefrontError",
    "get_http_status_code",
    "create_error_response",
    "HTTP_STATUS_MAP",

    # Auth
    "AuthenticationError",
    "PermissionDeniedError",

    # Domain
    "FieldError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",

    # Infrastructure
    "InternalError",
    "DatabaseError",
    "CacheError",
    "EventHandlingError",
]
