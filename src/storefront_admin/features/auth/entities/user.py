"""User domain entities for the auth feature."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ...permissions.entities import Grant, Role


@dataclass
class UserRecord:
    """A stored user row, including its credential."""

    id: Optional[str]
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    password_hash: Optional[str] = None
    role_id: Optional[str] = None
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def can_sign_in(self) -> bool:
        return self.is_active and not self.is_deleted


@dataclass
class AuthenticatedUser:
    """The user behind a valid session, with role and resolved grants."""

    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[Role] = None
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def permissions(self) -> List[Grant]:
        return list(self.role.grants) if self.role else []

    @property
    def role_name(self) -> Optional[str]:
        return self.role.name if self.role else None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_record(cls, record: UserRecord, role: Optional[Role]) -> "AuthenticatedUser":
        return cls(
            id=record.id,
            email=record.email,
            first_name=record.first_name,
            last_name=record.last_name,
            phone=record.phone,
            avatar=record.avatar,
            role=role,
            is_active=record.is_active,
            last_login_at=record.last_login_at,
            deleted_at=record.deleted_at,
        )

    def to_profile(self) -> Dict[str, Any]:
        """Render the profile returned by login and ``/auth/me``."""
        role = None
        if self.role:
            role = {
                "id": self.role.id,
                "name": self.role.name,
                "display_name": self.role.display_name,
            }
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "avatar": self.avatar,
            "role": role,
            "permissions": [grant.to_dict() for grant in self.permissions],
        }
