"""Settings feature."""

from .entities import Setting, SettingInput, SettingRepository
from .services import SettingsService
from .repositories import AsyncPGSettingRepository

__all__ = [
    "Setting",
    "SettingInput",
    "SettingRepository",
    "SettingsService",
    "AsyncPGSettingRepository",
]
