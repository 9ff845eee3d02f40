"""Admin request and response models."""

from typing import Any, Dict, List, Optional

from pydantic import Field

from ...models.base import BaseSchema


class RoleCreateRequest(BaseSchema):
    name: str = Field(..., max_length=100, description="Lower snake case identifier")
    display_name: str = Field(..., max_length=200)
    description: Optional[str] = None
    permission_ids: List[str] = Field(default_factory=list)


class RoleUpdateRequest(BaseSchema):
    name: Optional[str] = Field(None, max_length=100)
    display_name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    permission_ids: Optional[List[str]] = Field(None, description="Replaces the whole permission set")


class AssignRoleRequest(BaseSchema):
    role_id: str


class SetPasswordRequest(BaseSchema):
    password: str


class SettingUpdateRequest(BaseSchema):
    value: Any = Field(..., description="Any JSON value")
    group: Optional[str] = None
    is_public: Optional[bool] = None


class MoveCategoryRequest(BaseSchema):
    parent_id: Optional[str] = Field(None, description="New parent; null makes the category a root")


class GrantOut(BaseSchema):
    resource: str
    action: str
    scope: str


class RoleOut(BaseSchema):
    id: Optional[str]
    name: str
    display_name: str
    description: Optional[str] = None
    is_system: bool = False
    is_default: bool = False
    permissions: List[GrantOut] = Field(default_factory=list)
    user_count: int = 0


class PermissionOut(BaseSchema):
    id: Optional[str]
    resource: str
    action: str
    scope: str
    name: str
    description: Optional[str] = None
    group: Optional[str] = None


class SettingOut(BaseSchema):
    key: str
    value: Any = None
    group: Optional[str] = None
    is_public: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CategoryOut(BaseSchema):
    id: Optional[str]
    name: str
    slug: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    rank: int = 0
    is_active: bool = True
