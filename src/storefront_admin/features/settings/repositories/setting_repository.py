"""AsyncPG-based setting repository implementation."""

from typing import Dict, List, Optional, Sequence
import json
import logging

import asyncpg

from ....database import DatabaseManager, parse_command_count
from ..entities import Setting, SettingInput


logger = logging.getLogger(__name__)

SETTING_COLUMNS = "key, value::text AS value, group_name, is_public, metadata::text AS metadata, updated_at"

UPSERT_SQL = f"""
    INSERT INTO settings (key, value, group_name, is_public)
    VALUES ($1, $2::jsonb, $3, COALESCE($4, FALSE))
    ON CONFLICT (key) DO UPDATE SET
        value = EXCLUDED.value,
        group_name = COALESCE($3, settings.group_name),
        is_public = COALESCE($4, settings.is_public),
        updated_at = NOW()
    RETURNING {SETTING_COLUMNS}
"""


def build_setting_from_row(row: asyncpg.Record) -> Setting:
    """Build Setting entity from database row."""
    return Setting(
        key=row["key"],
        value=json.loads(row["value"]) if row["value"] is not None else None,
        group=row["group_name"],
        is_public=row["is_public"],
        metadata=json.loads(row["metadata"]) if row["metadata"] else {},
        updated_at=row["updated_at"],
    )


def _params(item: SettingInput):
    return (item.key, json.dumps(item.value), item.group, item.is_public)


class AsyncPGSettingRepository:
    """AsyncPG implementation of SettingRepository protocol."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def get(self, key: str) -> Optional[Setting]:
        row = await self.database.fetchrow(f"SELECT {SETTING_COLUMNS} FROM settings WHERE key = $1", key)
        return build_setting_from_row(row) if row else None

    async def list_all(self) -> List[Setting]:
        rows = await self.database.fetch(f"SELECT {SETTING_COLUMNS} FROM settings ORDER BY group_name, key")
        return [build_setting_from_row(row) for row in rows]

    async def list_public(self) -> Dict[str, object]:
        rows = await self.database.fetch(
            f"SELECT {SETTING_COLUMNS} FROM settings WHERE is_public = TRUE ORDER BY key"
        )
        return {row["key"]: build_setting_from_row(row).value for row in rows}

    async def upsert(self, item: SettingInput) -> Setting:
        row = await self.database.fetchrow(UPSERT_SQL, *_params(item))
        return build_setting_from_row(row)

    async def bulk_upsert(self, items: Sequence[SettingInput]) -> List[Setting]:
        results = []
        async with self.database.transaction() as conn:
            for item in items:
                row = await conn.fetchrow(UPSERT_SQL, *_params(item))
                results.append(build_setting_from_row(row))
        return results

    async def delete(self, key: str) -> bool:
        status = await self.database.execute("DELETE FROM settings WHERE key = $1", key)
        return parse_command_count(status) > 0
