"""Settings entities package."""

from .setting import Setting, SettingInput
from .protocols import SettingRepository

__all__ = ["Setting", "SettingInput", "SettingRepository"]
