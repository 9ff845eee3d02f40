"""Configuration module for storefront-admin."""

from .constants import (
    PermissionAction,
    PermissionScope,
    SUPER_ADMIN_ROLE,
    ROLES_RESOURCE,
    CacheKeys,
)
from .logging_config import (
    setup_logging,
    AUDIT_LOGGER,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)
from .settings import AppSettings, get_settings

__all__ = [
    # Constants
    "PermissionAction",
    "PermissionScope",
    "SUPER_ADMIN_ROLE",
    "ROLES_RESOURCE",
    "CacheKeys",

    # Logging
    "setup_logging",
    "AUDIT_LOGGER",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",

    # Settings
    "AppSettings",
    "get_settings",
]
