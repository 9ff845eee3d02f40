"""Settings repositories package."""

from .setting_repository import AsyncPGSettingRepository

__all__ = ["AsyncPGSettingRepository"]
