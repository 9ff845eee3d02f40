"""Domain and infrastructure exceptions for storefront-admin."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .base import StorefrontError


@dataclass(frozen=True)
class FieldError:
    """A validation failure attached to one input field."""

    field: str
    message: str


class ValidationError(StorefrontError):
    """Malformed input, optionally with per-field detail."""

    default_code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        errors: Optional[List[FieldError]] = None,
        field: Optional[str] = None,
        **kwargs
    ):
        errors = list(errors or [])
        if field is not None:
            errors.append(FieldError(field=field, message=message))
        details = dict(kwargs.pop("details", None) or {})
        if errors:
            details["errors"] = [asdict(error) for error in errors]
        super().__init__(message, details=details, **kwargs)
        self.errors = errors

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]


class NotFoundError(StorefrontError):
    """Referenced entity is absent."""

    default_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource: str, identifier: Optional[Any] = None, **kwargs):
        message = kwargs.pop("message", None) or f"{resource} not found"
        details = dict(kwargs.pop("details", None) or {})
        details["resource"] = resource
        if identifier is not None:
            details["id"] = str(identifier)
        super().__init__(message, details=details, **kwargs)
        self.resource = resource


class ConflictError(StorefrontError):
    """Uniqueness violation."""

    default_code = "RESOURCE_CONFLICT"

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        details = dict(kwargs.pop("details", None) or {})
        if field is not None:
            details["errors"] = [{"field": field, "message": message}]
        super().__init__(message, details=details, **kwargs)
        self.field = field


class InternalError(StorefrontError):
    """Persistence or infrastructure failure. Fatal, never retried."""

    default_code = "INTERNAL_ERROR"


class DatabaseError(InternalError):
    """Raised when the relational store fails."""
    pass


class CacheError(InternalError):
    """Raised when a cache operation fails."""
    pass


class EventHandlingError(InternalError):
    """Raised when awaited event handlers fail."""

    def __init__(self, event_name: str, failures: List[BaseException], **kwargs):
        message = f"{len(failures)} handler(s) failed for event {event_name}"
        details: Dict[str, Any] = {
            "event": event_name,
            "failures": [f"{type(failure).__name__}: {failure}" for failure in failures],
        }
        super().__init__(message, details=details, **kwargs)
        self.event_name = event_name
        self.failures = failures
