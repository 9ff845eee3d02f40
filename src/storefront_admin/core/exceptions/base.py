"""Root of the storefront-admin exception hierarchy."""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """Base exception for all storefront-admin errors.

    ``error_code`` is stable and machine-readable; ``message`` is meant
    for people. Subclasses set ``default_code``.
    """

    default_code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__,
        }
