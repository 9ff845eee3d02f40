"""Tests for role management."""

import pytest

from storefront_admin.config.constants import PermissionAction, PermissionScope
from storefront_admin.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from storefront_admin.features.events.entities import EventName

A = PermissionAction
S = PermissionScope


@pytest.fixture
def recorded(services):
    """Role events delivered on the container bus."""
    events = []
    for name in (EventName.ROLE_CREATED, EventName.ROLE_UPDATED, EventName.ROLE_DELETED):
        services.event_bus.subscribe(name, lambda payload, name=name: events.append((name, payload)))
    return events


class TestRoleService:
    """Test role CRUD and its guards."""

    @pytest.mark.asyncio
    async def test_create_role(self, services, make_user, permission_repo, recorded):
        actor = make_user("super_admin")
        permission_id = permission_repo.id_for("orders", A.READ, S.OWN)

        role = await services.role_service.create_role(
            actor, "warehouse", "Warehouse", "Ships orders", [permission_id, permission_id]
        )

        assert role.name == "warehouse"
        assert role.is_system is False
        assert [str(g) for g in role.grants] == ["orders:READ:OWN"]
        assert recorded[0][0] == EventName.ROLE_CREATED
        assert recorded[0][1].meta.user_id == actor.id

    @pytest.mark.asyncio
    async def test_create_requires_roles_create(self, services, make_user):
        with pytest.raises(PermissionDeniedError):
            await services.role_service.create_role(make_user("admin"), "warehouse", "Warehouse")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["Warehouse", "1st", "with space", ""])
    async def test_create_rejects_bad_names(self, services, make_user, name):
        with pytest.raises(ValidationError) as exc_info:
            await services.role_service.create_role(make_user("super_admin"), name, "Display")
        assert exc_info.value.fields == ["name"]

    @pytest.mark.asyncio
    async def test_create_rejects_duplicates(self, services, make_user):
        with pytest.raises(ConflictError) as exc_info:
            await services.role_service.create_role(make_user("super_admin"), "support", "Support")
        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_create_rejects_unknown_permissions(self, services, make_user):
        with pytest.raises(ValidationError) as exc_info:
            await services.role_service.create_role(
                make_user("super_admin"), "warehouse", "Warehouse", permission_ids=["nope"]
            )
        assert exc_info.value.fields == ["permission_ids"]

    @pytest.mark.asyncio
    async def test_system_role_fields_are_fixed(self, services, make_user, roles):
        with pytest.raises(ValidationError):
            await services.role_service.update_role(
                make_user("super_admin"), roles["support"].id, {"name": "helpdesk"}
            )

    @pytest.mark.asyncio
    async def test_system_role_permissions_can_change(self, services, make_user, roles,
                                                      permission_repo, recorded):
        actor = make_user("super_admin")
        permission_id = permission_repo.id_for("chat", A.MANAGE, S.ALL)

        updated = await services.role_service.update_role(
            actor, roles["support"].id, {"name": "support"}, [permission_id]
        )

        assert [str(g) for g in updated.grants] == ["chat:MANAGE:ALL"]
        assert recorded[-1][0] == EventName.ROLE_UPDATED

    @pytest.mark.asyncio
    async def test_role_update_evicts_permission_caches(self, services, make_user, roles):
        services.cache.set("user:u1:permissions", ["x"])
        services.cache.set("user:u1", {"id": "u1"})

        await services.role_service.update_role(
            make_user("super_admin"), roles["support"].id, {}, []
        )

        assert services.cache.keys() == ["user:u1"]

    @pytest.mark.asyncio
    async def test_rename_custom_role(self, services, make_user):
        actor = make_user("super_admin")
        role = await services.role_service.create_role(actor, "warehouse", "Warehouse")

        updated = await services.role_service.update_role(actor, role.id, {"name": "shipping"})

        assert updated.name == "shipping"
        with pytest.raises(ConflictError):
            await services.role_service.update_role(actor, role.id, {"name": "support"})

    @pytest.mark.asyncio
    async def test_update_missing_role(self, services, make_user):
        with pytest.raises(NotFoundError):
            await services.role_service.update_role(make_user("super_admin"), "missing", {})

    @pytest.mark.asyncio
    async def test_delete_role(self, services, make_user, store, recorded):
        actor = make_user("super_admin")
        role = await services.role_service.create_role(actor, "warehouse", "Warehouse")

        await services.role_service.delete_role(actor, role.id)

        assert role.id not in store.roles
        assert recorded[-1][0] == EventName.ROLE_DELETED

    @pytest.mark.asyncio
    async def test_system_roles_cannot_be_deleted(self, services, make_user, roles):
        with pytest.raises(ValidationError):
            await services.role_service.delete_role(make_user("super_admin"), roles["customer"].id)

    @pytest.mark.asyncio
    async def test_assigned_roles_cannot_be_deleted(self, services, make_user, store):
        actor = make_user("super_admin")
        role = await services.role_service.create_role(actor, "warehouse", "Warehouse")
        member = make_user("customer")
        store.users[member.id].role_id = role.id

        with pytest.raises(ValidationError) as exc_info:
            await services.role_service.delete_role(actor, role.id)

        assert exc_info.value.details["user_count"] == 1

    @pytest.mark.asyncio
    async def test_list_roles_requires_roles_read(self, services, make_user, roles):
        listed = await services.role_service.list_roles(make_user("super_admin"))
        assert {r.name for r in listed} == set(roles)

        with pytest.raises(PermissionDeniedError):
            await services.role_service.list_roles(make_user("order_manager"))
