"""Role domain entity for the permissions feature.

A role is a named bundle of grants. ``name`` is the stable identifier used
in business logic; ``is_system`` protects against deletion or rename and
``is_default`` marks the role given to self-registered users.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ....config.constants import SUPER_ADMIN_ROLE
from .permission import Grant

ROLE_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")


@dataclass
class Role:
    """Domain entity representing a role with its resolved grants."""

    id: Optional[str]
    name: str
    display_name: str
    description: Optional[str] = None
    is_system: bool = False
    is_default: bool = False
    grants: List[Grant] = field(default_factory=list)
    user_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("Role name cannot be empty")
        if not self.display_name:
            self.display_name = self.name

    @property
    def is_super_admin(self) -> bool:
        return self.name == SUPER_ADMIN_ROLE

    def is_deletable(self) -> bool:
        return not self.is_system and self.user_count == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "display_name": self.display_name,
            "description": self.description,
            "is_system": self.is_system,
            "is_default": self.is_default,
            "permissions": [grant.to_dict() for grant in self.grants],
            "user_count": self.user_count,
        }

    def __repr__(self) -> str:
        flags = []
        if self.is_system:
            flags.append("system")
        if self.is_default:
            flags.append("default")
        flag_info = f" [{', '.join(flags)}]" if flags else ""
        return f"Role({self.name}, grants={len(self.grants)}{flag_info})"


def is_valid_role_name(name: str) -> bool:
    """Role names are lower snake case identifiers."""
    return bool(name) and len(name) <= 100 and bool(ROLE_NAME_PATTERN.match(name))
