"""Tests for the settings service."""

import pytest

from storefront_admin.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from storefront_admin.features.settings.entities import SettingInput
from storefront_admin.features.settings.services import SettingsService


class TestSettingsService:
    """Test cached reads and evicting writes."""

    @pytest.mark.asyncio
    async def test_get_setting_is_cached(self, services, make_user, setting_repo):
        admin = make_user("admin")
        super_admin = make_user("super_admin")
        await services.settings_service.upsert_setting(super_admin, "store_name", "Shop")
        reads = setting_repo.reads

        first = await services.settings_service.get_setting(admin, "store_name")
        second = await services.settings_service.get_setting(admin, "store_name")

        assert first.value == second.value == "Shop"
        assert setting_repo.reads == reads + 1

    @pytest.mark.asyncio
    async def test_upsert_evicts_cached_value(self, services, make_user):
        admin = make_user("super_admin")
        await services.settings_service.upsert_setting(admin, "store_name", "Shop")
        await services.settings_service.get_setting(admin, "store_name")

        await services.settings_service.upsert_setting(admin, "store_name", "Better Shop")

        assert (await services.settings_service.get_setting(admin, "store_name")).value == "Better Shop"

    @pytest.mark.asyncio
    async def test_public_settings(self, services, make_user):
        admin = make_user("super_admin")
        await services.settings_service.upsert_setting(admin, "store_name", "Shop", is_public=True)
        await services.settings_service.upsert_setting(admin, "smtp_password", "hunter2")

        assert await services.settings_service.get_public_settings() == {"store_name": "Shop"}

        await services.settings_service.upsert_setting(admin, "hotline", "1900", is_public=True)

        assert await services.settings_service.get_public_settings() == {
            "store_name": "Shop",
            "hotline": "1900",
        }

    @pytest.mark.asyncio
    async def test_permissions(self, services, make_user):
        admin = make_user("admin")

        with pytest.raises(PermissionDeniedError):
            await services.settings_service.upsert_setting(admin, "store_name", "Shop")
        with pytest.raises(PermissionDeniedError):
            await services.settings_service.list_settings(make_user("support"))

    @pytest.mark.asyncio
    async def test_missing_setting(self, services, make_user):
        admin = make_user("super_admin")

        with pytest.raises(NotFoundError):
            await services.settings_service.get_setting(admin, "missing")
        with pytest.raises(NotFoundError):
            await services.settings_service.delete_setting(admin, "missing")

    @pytest.mark.asyncio
    async def test_bulk_upsert(self, services, make_user, store):
        admin = make_user("super_admin")
        items = SettingsService.parse_bulk({"store_name": "Shop", "currency": "VND"})

        settings = await services.settings_service.bulk_upsert(admin, items)

        assert [s.key for s in settings] == ["store_name", "currency"]
        assert store.settings["currency"].value == "VND"

        with pytest.raises(ValidationError):
            await services.settings_service.bulk_upsert(admin, [])

    @pytest.mark.asyncio
    async def test_delete_setting(self, services, make_user, store):
        admin = make_user("super_admin")
        await services.settings_service.upsert_setting(admin, "store_name", "Shop")
        await services.settings_service.get_setting(admin, "store_name")

        await services.settings_service.delete_setting(admin, "store_name")

        assert "store_name" not in store.settings
        assert services.cache.get("settings:store_name") is None


class TestParseBulk:
    """Test the accepted bulk body shapes."""

    def test_list_of_entries(self):
        items = SettingsService.parse_bulk([
            {"key": "store_name", "value": "Shop", "is_public": True},
            {"key": "tax_rate", "value": 0.1, "group": "billing"},
        ])

        assert items == [
            SettingInput("store_name", "Shop", None, True),
            SettingInput("tax_rate", 0.1, "billing", None),
        ]

    @pytest.mark.parametrize("body", [
        [{"value": 1}],
        [{"key": "a"}],
        "not-a-list",
        [1],
    ])
    def test_rejects_malformed(self, body):
        with pytest.raises(ValidationError):
            SettingsService.parse_bulk(body)
