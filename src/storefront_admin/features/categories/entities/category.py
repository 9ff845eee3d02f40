"""Category domain entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class Category:
    id: Optional[str]
    name: str
    slug: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    rank: int = 0
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "parent_id": self.parent_id,
            "description": self.description,
            "rank": self.rank,
            "is_active": self.is_active,
        }
