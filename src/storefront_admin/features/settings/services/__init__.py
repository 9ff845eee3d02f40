"""Settings services package."""

from .settings_service import SettingsService

__all__ = ["SettingsService"]
