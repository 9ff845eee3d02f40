"""Settings service.

Reads go through the memory cache; every mutation emits an awaited
``settings:updated`` so stale entries are evicted before the call returns.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ....config.constants import CacheKeys, PermissionAction
from ....core.exceptions import NotFoundError, ValidationError
from ...cache.services import cached
from ...events.entities import EventMeta, EventName, SettingsUpdatedEvent
from ...permissions.services import ensure_permission
from ..entities import Setting, SettingInput, SettingRepository

logger = logging.getLogger(__name__)

SETTINGS_RESOURCE = "settings"
DEFAULT_SETTINGS_TTL = 600


class SettingsService:
    """Key/value store administration."""

    def __init__(
        self,
        setting_repo: SettingRepository,
        cache,
        event_bus,
        ttl: int = DEFAULT_SETTINGS_TTL,
    ):
        self.setting_repo = setting_repo
        self.cache = cache
        self.event_bus = event_bus
        self.ttl = ttl

    async def get_setting(self, actor, key: str) -> Setting:
        ensure_permission(actor, SETTINGS_RESOURCE, PermissionAction.READ)

        setting = await cached(
            self.cache, CacheKeys.setting(key), lambda: self.setting_repo.get(key), self.ttl
        )
        if setting is None:
            raise NotFoundError("Setting", key)
        return setting

    async def list_settings(self, actor) -> List[Setting]:
        ensure_permission(actor, SETTINGS_RESOURCE, PermissionAction.READ)
        return await self.setting_repo.list_all()

    async def get_public_settings(self) -> Dict[str, Any]:
        """Public settings for anonymous clients."""
        settings = await cached(
            self.cache, CacheKeys.PUBLIC_SETTINGS, self.setting_repo.list_public, self.ttl
        )
        return settings or {}

    async def _announce(self, actor, key: str, value: Any) -> None:
        await self.event_bus.emit_awaited(
            EventName.SETTINGS_UPDATED,
            SettingsUpdatedEvent(key=key, value=value, meta=EventMeta(user_id=actor.id)),
        )

    async def upsert_setting(
        self,
        actor,
        key: str,
        value: Any,
        group: Optional[str] = None,
        is_public: Optional[bool] = None,
    ) -> Setting:
        ensure_permission(actor, SETTINGS_RESOURCE, PermissionAction.UPDATE)
        if not key:
            raise ValidationError("Setting key is required", field="key")

        setting = await self.setting_repo.upsert(SettingInput(key, value, group, is_public))
        logger.info(f"Setting {key} updated by {actor.id}")

        await self._announce(actor, key, setting.value)
        return setting

    @staticmethod
    def parse_bulk(body: Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]) -> List[SettingInput]:
        """Accept either a list of ``{key, value, ...}`` objects or a ``{key: value}`` map."""
        if isinstance(body, Mapping):
            entries = [{"key": key, "value": value} for key, value in body.items()]
        elif isinstance(body, (list, tuple)):
            entries = list(body)
        else:
            raise ValidationError("Settings must be a list or an object")

        items = []
        for entry in entries:
            if not isinstance(entry, Mapping) or not entry.get("key"):
                raise ValidationError("Setting key is required", field="key")
            if "value" not in entry:
                raise ValidationError(f"Value is required for key: {entry['key']}", field=entry["key"])
            items.append(SettingInput(
                key=entry["key"],
                value=entry["value"],
                group=entry.get("group"),
                is_public=entry.get("is_public"),
            ))
        return items

    async def bulk_upsert(self, actor, items: Sequence[SettingInput]) -> List[Setting]:
        """Upsert several settings atomically."""
        ensure_permission(actor, SETTINGS_RESOURCE, PermissionAction.UPDATE)
        if not items:
            raise ValidationError("No settings provided")

        settings = await self.setting_repo.bulk_upsert(list(items))
        logger.info(f"{len(settings)} settings updated by {actor.id}")

        for setting in settings:
            await self._announce(actor, setting.key, setting.value)
        return settings

    async def delete_setting(self, actor, key: str) -> None:
        ensure_permission(actor, SETTINGS_RESOURCE, PermissionAction.DELETE)

        if not await self.setting_repo.delete(key):
            raise NotFoundError("Setting", key)
        logger.info(f"Setting {key} deleted by {actor.id}")

        await self._announce(actor, key, None)
