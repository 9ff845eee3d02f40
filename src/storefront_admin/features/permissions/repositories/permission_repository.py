"""AsyncPG-based permission repository implementation."""

from typing import List, Sequence
import logging

import asyncpg

from ....database import DatabaseManager
from ..entities import Permission


logger = logging.getLogger(__name__)

PERMISSION_COLUMNS = """
    id, resource, action, scope, name, description, group_name, is_system, created_at
"""


def build_permission_from_row(row: asyncpg.Record) -> Permission:
    """Build Permission entity from database row."""
    return Permission(
        id=str(row["id"]),
        resource=row["resource"],
        action=row["action"],
        scope=row["scope"],
        name=row["name"],
        description=row["description"],
        group=row["group_name"],
        is_system=row["is_system"],
        created_at=row["created_at"],
    )


class AsyncPGPermissionRepository:
    """AsyncPG implementation of PermissionRepository protocol."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def list_all(self) -> List[Permission]:
        rows = await self.database.fetch(
            f"SELECT {PERMISSION_COLUMNS} FROM permissions ORDER BY group_name, resource, action, scope"
        )
        return [build_permission_from_row(row) for row in rows]

    async def get_by_ids(self, permission_ids: Sequence[str]) -> List[Permission]:
        if not permission_ids:
            return []
        rows = await self.database.fetch(
            f"SELECT {PERMISSION_COLUMNS} FROM permissions WHERE id = ANY($1::uuid[])",
            list(permission_ids),
        )
        return [build_permission_from_row(row) for row in rows]

    async def upsert(self, permission: Permission) -> Permission:
        row = await self.database.fetchrow(
            f"""
            INSERT INTO permissions (resource, action, scope, name, description, group_name, is_system)
            VALUES ($1, $2, $3, $4, $5, $6, $7)
            ON CONFLICT (resource, action, scope) DO UPDATE SET
                name = EXCLUDED.name,
                description = EXCLUDED.description,
                group_name = EXCLUDED.group_name,
                is_system = EXCLUDED.is_system
            RETURNING {PERMISSION_COLUMNS}
            """,
            permission.resource,
            permission.action.value,
            permission.scope.value,
            permission.name,
            permission.description,
            permission.group,
            permission.is_system,
        )
        return build_permission_from_row(row)
