"""Auth response models."""

from typing import List, Optional

from pydantic import Field

from ....models.base import BaseSchema


class GrantSchema(BaseSchema):
    resource: str
    action: str
    scope: str


class RoleSummary(BaseSchema):
    id: Optional[str] = None
    name: str
    display_name: str


class UserProfile(BaseSchema):
    """Profile returned by login, register and ``/auth/me``."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    avatar: Optional[str] = None
    role: Optional[RoleSummary] = None
    permissions: List[GrantSchema] = Field(default_factory=list)

    @classmethod
    def from_user(cls, user) -> "UserProfile":
        return cls.model_validate(user.to_profile())
