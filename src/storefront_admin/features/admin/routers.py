"""
Admin API endpoints.

Each route is gated by ``require_permission``; the services repeat the
check so they stay safe when called outside HTTP.
"""
import logging
from typing import Any, Dict, List, Union

from fastapi import APIRouter, Body, Depends, status

from ...config.constants import PermissionAction as Action
from ...models.base import APIResponse, ErrorResponse
from ..auth.dependencies import get_services, require_permission
from .models import (
    AssignRoleRequest,
    CategoryOut,
    MoveCategoryRequest,
    PermissionOut,
    RoleCreateRequest,
    RoleOut,
    RoleUpdateRequest,
    SetPasswordRequest,
    SettingOut,
    SettingUpdateRequest,
)

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Not signed in"},
    403: {"model": ErrorResponse, "description": "Missing permission"},
}

router = APIRouter(prefix="/admin", tags=["Admin"], responses=ERROR_RESPONSES)
public_router = APIRouter(tags=["Storefront"])


def _role_out(role) -> RoleOut:
    return RoleOut.model_validate(role.to_dict())


# Roles

@router.get("/roles", response_model=APIResponse[List[RoleOut]])
async def list_roles(
    actor=Depends(require_permission("roles", Action.READ)),
    services=Depends(get_services),
):
    roles = await services.role_service.list_roles(actor)
    return APIResponse.success_response(data=[_role_out(role) for role in roles])


@router.get("/roles/{role_id}", response_model=APIResponse[RoleOut])
async def get_role(
    role_id: str,
    actor=Depends(require_permission("roles", Action.READ)),
    services=Depends(get_services),
):
    role = await services.role_service.get_role(actor, role_id)
    return APIResponse.success_response(data=_role_out(role))


@router.post("/roles", response_model=APIResponse[RoleOut], status_code=status.HTTP_201_CREATED)
async def create_role(
    body: RoleCreateRequest,
    actor=Depends(require_permission("roles", Action.CREATE)),
    services=Depends(get_services),
):
    role = await services.role_service.create_role(
        actor, body.name, body.display_name, body.description, body.permission_ids
    )
    return APIResponse.success_response(data=_role_out(role), message="Role created")


@router.put("/roles/{role_id}", response_model=APIResponse[RoleOut])
async def update_role(
    role_id: str,
    body: RoleUpdateRequest,
    actor=Depends(require_permission("roles", Action.UPDATE)),
    services=Depends(get_services),
):
    changes = body.model_dump(exclude={"permission_ids"}, exclude_none=True)
    role = await services.role_service.update_role(actor, role_id, changes, body.permission_ids)
    return APIResponse.success_response(data=_role_out(role), message="Role updated")


@router.delete("/roles/{role_id}", response_model=APIResponse[None])
async def delete_role(
    role_id: str,
    actor=Depends(require_permission("roles", Action.DELETE)),
    services=Depends(get_services),
):
    await services.role_service.delete_role(actor, role_id)
    return APIResponse.success_response(message="Role deleted")


@router.get("/permissions", response_model=APIResponse[Dict[str, List[PermissionOut]]])
async def list_permissions(
    actor=Depends(require_permission("roles", Action.READ)),
    services=Depends(get_services),
):
    grouped = await services.permission_service.list_grouped(actor)
    data = {
        group: [PermissionOut.model_validate(p.to_dict()) for p in permissions]
        for group, permissions in grouped.items()
    }
    return APIResponse.success_response(data=data)


# Users

@router.delete("/users/{user_id}", response_model=APIResponse[None])
async def delete_user(
    user_id: str,
    actor=Depends(require_permission("users", Action.DELETE)),
    services=Depends(get_services),
):
    await services.user_service.soft_delete_user(actor, user_id)
    return APIResponse.success_response(message="User deleted")


@router.put("/users/{user_id}/role", response_model=APIResponse[RoleOut])
async def assign_user_role(
    user_id: str,
    body: AssignRoleRequest,
    actor=Depends(require_permission("users", Action.UPDATE)),
    services=Depends(get_services),
):
    role = await services.user_service.assign_role(actor, user_id, body.role_id)
    return APIResponse.success_response(data=_role_out(role), message="Role assigned")


@router.put("/users/{user_id}/password", response_model=APIResponse[None])
async def set_user_password(
    user_id: str,
    body: SetPasswordRequest,
    actor=Depends(require_permission("users", Action.UPDATE)),
    services=Depends(get_services),
):
    await services.user_service.set_password(actor, user_id, body.password)
    return APIResponse.success_response(message="Password updated")


# Settings

@router.get("/settings", response_model=APIResponse[List[SettingOut]])
async def list_settings(
    actor=Depends(require_permission("settings", Action.READ)),
    services=Depends(get_services),
):
    settings = await services.settings_service.list_settings(actor)
    return APIResponse.success_response(data=[SettingOut.model_validate(s.to_dict()) for s in settings])


@router.get("/settings/{key}", response_model=APIResponse[SettingOut])
async def get_setting(
    key: str,
    actor=Depends(require_permission("settings", Action.READ)),
    services=Depends(get_services),
):
    setting = await services.settings_service.get_setting(actor, key)
    return APIResponse.success_response(data=SettingOut.model_validate(setting.to_dict()))


@router.put("/settings/{key}", response_model=APIResponse[SettingOut])
async def put_setting(
    key: str,
    body: SettingUpdateRequest,
    actor=Depends(require_permission("settings", Action.UPDATE)),
    services=Depends(get_services),
):
    setting = await services.settings_service.upsert_setting(
        actor, key, body.value, body.group, body.is_public
    )
    return APIResponse.success_response(data=SettingOut.model_validate(setting.to_dict()))


@router.post("/settings", response_model=APIResponse[List[SettingOut]])
async def bulk_upsert_settings(
    body: Union[List[Dict[str, Any]], Dict[str, Any]] = Body(...),
    actor=Depends(require_permission("settings", Action.UPDATE)),
    services=Depends(get_services),
):
    items = services.settings_service.parse_bulk(body)
    settings = await services.settings_service.bulk_upsert(actor, items)
    return APIResponse.success_response(data=[SettingOut.model_validate(s.to_dict()) for s in settings])


@router.delete("/settings/{key}", response_model=APIResponse[None])
async def delete_setting(
    key: str,
    actor=Depends(require_permission("settings", Action.DELETE)),
    services=Depends(get_services),
):
    await services.settings_service.delete_setting(actor, key)
    return APIResponse.success_response(message="Setting deleted")


# Categories

@router.get("/categories/{category_id}", response_model=APIResponse[CategoryOut])
async def get_category(
    category_id: str,
    actor=Depends(require_permission("categories", Action.READ)),
    services=Depends(get_services),
):
    category = await services.category_service.get_category(actor, category_id)
    return APIResponse.success_response(data=CategoryOut.model_validate(category.to_dict()))


@router.put("/categories/{category_id}/parent", response_model=APIResponse[CategoryOut])
async def move_category(
    category_id: str,
    body: MoveCategoryRequest,
    actor=Depends(require_permission("categories", Action.UPDATE)),
    services=Depends(get_services),
):
    category = await services.category_service.move_category(actor, category_id, body.parent_id)
    return APIResponse.success_response(data=CategoryOut.model_validate(category.to_dict()))


# Public

@public_router.get("/settings", response_model=Dict[str, Any])
async def public_settings(services=Depends(get_services)):
    """Public settings as a flat ``key -> value`` object; no session needed."""
    return await services.settings_service.get_public_settings()
