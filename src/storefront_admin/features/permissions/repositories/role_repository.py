"""AsyncPG-based role repository implementation.

Roles are read together with their resolved grants (the scope stored on
``role_permissions`` wins over the permission's own scope) and the number
of live users holding them.
"""

from typing import Any, Dict, List, Optional, Sequence
import json
import logging

import asyncpg

from ....database import DatabaseManager, parse_command_count
from ..entities import Grant, PermissionKey, Role


logger = logging.getLogger(__name__)

ROLE_COLUMNS = """
    r.id, r.name, r.display_name, r.description, r.is_system, r.is_default,
    r.created_at, r.updated_at,
    COALESCE((
        SELECT json_agg(json_build_object(
            'resource', p.resource,
            'action', p.action,
            'scope', COALESCE(rp.scope, p.scope)
        ) ORDER BY p.resource, p.action)
        FROM role_permissions rp
        JOIN permissions p ON p.id = rp.permission_id
        WHERE rp.role_id = r.id
    ), '[]'::json)::text AS grants,
    (
        SELECT COUNT(*) FROM users u
        WHERE u.role_id = r.id AND u.deleted_at IS NULL
    ) AS user_count
"""

# Columns a caller may change through update()
MUTABLE_COLUMNS = ("name", "display_name", "description", "is_default")


def build_role_from_row(row: asyncpg.Record) -> Role:
    """Build Role entity from database row."""
    raw_grants = row["grants"]
    if isinstance(raw_grants, str):
        raw_grants = json.loads(raw_grants)
    return Role(
        id=str(row["id"]),
        name=row["name"],
        display_name=row["display_name"],
        description=row["description"],
        is_system=row["is_system"],
        is_default=row["is_default"],
        grants=[Grant(g["resource"], g["action"], g["scope"]) for g in raw_grants or []],
        user_count=row["user_count"] or 0,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class AsyncPGRoleRepository:
    """AsyncPG implementation of RoleRepository protocol."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def _fetch_one(self, conn, where: str, *args) -> Optional[Role]:
        row = await conn.fetchrow(f"SELECT {ROLE_COLUMNS} FROM roles r WHERE {where}", *args)
        return build_role_from_row(row) if row else None

    async def get_by_id(self, role_id: str) -> Optional[Role]:
        async with self.database.connection() as conn:
            return await self._fetch_one(conn, "r.id = $1::uuid", role_id)

    async def get_by_name(self, name: str) -> Optional[Role]:
        async with self.database.connection() as conn:
            return await self._fetch_one(conn, "r.name = $1", name)

    async def get_default(self) -> Optional[Role]:
        async with self.database.connection() as conn:
            return await self._fetch_one(conn, "r.is_default = TRUE ORDER BY r.created_at LIMIT 1")

    async def list_all(self) -> List[Role]:
        rows = await self.database.fetch(
            f"SELECT {ROLE_COLUMNS} FROM roles r ORDER BY r.is_system DESC, r.name"
        )
        return [build_role_from_row(row) for row in rows]

    async def _replace_permissions(self, conn, role_id: str, permission_ids: Sequence[str]) -> None:
        await conn.execute("DELETE FROM role_permissions WHERE role_id = $1::uuid", role_id)
        if permission_ids:
            await conn.executemany(
                "INSERT INTO role_permissions (role_id, permission_id) VALUES ($1::uuid, $2::uuid)",
                [(role_id, pid) for pid in permission_ids],
            )

    async def create(self, role: Role, permission_ids: Sequence[str] = ()) -> Role:
        async with self.database.transaction() as conn:
            role_id = await conn.fetchval(
                """
                INSERT INTO roles (name, display_name, description, is_system, is_default)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING id
                """,
                role.name, role.display_name, role.description, role.is_system, role.is_default,
            )
            await self._replace_permissions(conn, str(role_id), permission_ids)
            return await self._fetch_one(conn, "r.id = $1", role_id)

    async def update(
        self,
        role_id: str,
        changes: Dict[str, Any],
        permission_ids: Optional[Sequence[str]] = None
    ) -> Optional[Role]:
        columns = [column for column in MUTABLE_COLUMNS if column in changes]

        async with self.database.transaction() as conn:
            if columns:
                assignments = ", ".join(f"{column} = ${i + 2}" for i, column in enumerate(columns))
                status = await conn.execute(
                    f"UPDATE roles SET {assignments}, updated_at = NOW() WHERE id = $1::uuid",
                    role_id, *[changes[column] for column in columns],
                )
                if parse_command_count(status) == 0:
                    return None
            elif not await conn.fetchval("SELECT 1 FROM roles WHERE id = $1::uuid", role_id):
                return None

            if permission_ids is not None:
                await self._replace_permissions(conn, role_id, permission_ids)
                await conn.execute("UPDATE roles SET updated_at = NOW() WHERE id = $1::uuid", role_id)

            return await self._fetch_one(conn, "r.id = $1::uuid", role_id)

    async def delete(self, role_id: str) -> bool:
        status = await self.database.execute("DELETE FROM roles WHERE id = $1::uuid", role_id)
        return parse_command_count(status) > 0

    async def sync_by_name(self, role: Role, permission_keys: Sequence[PermissionKey]) -> Role:
        async with self.database.transaction() as conn:
            role_id = await conn.fetchval(
                """
                INSERT INTO roles (name, display_name, description, is_system, is_default)
                VALUES ($1, $2, $3, $4, $5)
                ON CONFLICT (name) DO UPDATE SET
                    display_name = EXCLUDED.display_name,
                    description = EXCLUDED.description,
                    is_system = EXCLUDED.is_system,
                    is_default = EXCLUDED.is_default,
                    updated_at = NOW()
                RETURNING id
                """,
                role.name, role.display_name, role.description, role.is_system, role.is_default,
            )
            await conn.execute("DELETE FROM role_permissions WHERE role_id = $1", role_id)
            for resource, action, scope in permission_keys:
                await conn.execute(
                    """
                    INSERT INTO role_permissions (role_id, permission_id)
                    SELECT $1, p.id FROM permissions p
                    WHERE p.resource = $2 AND p.action = $3 AND p.scope = $4
                    """,
                    role_id, resource, action.value, scope.value,
                )
            logger.debug(f"Synced role {role.name} with {len(permission_keys)} grants")
            return await self._fetch_one(conn, "r.id = $1", role_id)
