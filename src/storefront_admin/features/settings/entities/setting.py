"""Setting domain entity.

Settings are JSON values stored under a unique key. Public settings are
exposed to anonymous storefront clients.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Setting:
    key: str
    value: Any = None
    group: Optional[str] = None
    is_public: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "group": self.group,
            "is_public": self.is_public,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class SettingInput:
    """One entry of an upsert; ``None`` for group/is_public keeps the stored value."""

    key: str
    value: Any
    group: Optional[str] = None
    is_public: Optional[bool] = None
