"""AsyncPG-based user repository implementation."""

from datetime import datetime
from typing import Any, Dict, Optional, Tuple
import logging

import asyncpg

from ....database import DatabaseManager, parse_command_count
from ...permissions.entities import Role
from ...permissions.repositories.role_repository import ROLE_COLUMNS, build_role_from_row
from ..entities import UserRecord


logger = logging.getLogger(__name__)

USER_COLUMNS = """
    id, email, first_name, last_name, phone, avatar, password_hash, role_id,
    is_active, last_login_at, deleted_at, created_at
"""

# Columns a caller may change through update()
MUTABLE_COLUMNS = ("email", "first_name", "last_name", "phone", "avatar", "is_active")


def build_user_from_row(row: asyncpg.Record) -> UserRecord:
    """Build UserRecord entity from database row."""
    return UserRecord(
        id=str(row["id"]),
        email=row["email"],
        first_name=row["first_name"] or "",
        last_name=row["last_name"] or "",
        phone=row["phone"],
        avatar=row["avatar"],
        password_hash=row["password_hash"],
        role_id=str(row["role_id"]) if row["role_id"] else None,
        is_active=row["is_active"],
        last_login_at=row["last_login_at"],
        deleted_at=row["deleted_at"],
        created_at=row["created_at"],
    )


class AsyncPGUserRepository:
    """AsyncPG implementation of UserRepository protocol."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def _find_one(self, where: str, *args) -> Optional[UserRecord]:
        row = await self.database.fetchrow(f"SELECT {USER_COLUMNS} FROM users WHERE {where}", *args)
        return build_user_from_row(row) if row else None

    async def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        return await self._find_one("id = $1::uuid", user_id)

    async def find_by_email(self, email: str) -> Optional[UserRecord]:
        return await self._find_one("email = $1", email)

    async def find_by_phone(self, phone: str) -> Optional[UserRecord]:
        return await self._find_one("phone = $1", phone)

    async def find_with_role(self, user_id: str) -> Optional[Tuple[UserRecord, Optional[Role]]]:
        async with self.database.connection() as conn:
            row = await conn.fetchrow(f"SELECT {USER_COLUMNS} FROM users WHERE id = $1::uuid", user_id)
            if row is None:
                return None
            user = build_user_from_row(row)
            role = None
            if user.role_id:
                role_row = await conn.fetchrow(
                    f"SELECT {ROLE_COLUMNS} FROM roles r WHERE r.id = $1::uuid", user.role_id
                )
                role = build_role_from_row(role_row) if role_row else None
            return user, role

    async def create(self, user: UserRecord) -> UserRecord:
        row = await self.database.fetchrow(
            f"""
            INSERT INTO users (email, first_name, last_name, phone, avatar, password_hash, role_id, is_active)
            VALUES ($1, $2, $3, $4, $5, $6, $7::uuid, $8)
            RETURNING {USER_COLUMNS}
            """,
            user.email,
            user.first_name,
            user.last_name,
            user.phone,
            user.avatar,
            user.password_hash,
            user.role_id,
            user.is_active,
        )
        return build_user_from_row(row)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[UserRecord]:
        columns = [column for column in MUTABLE_COLUMNS if column in changes]
        if not columns:
            return await self.find_by_id(user_id)
        assignments = ", ".join(f"{column} = ${i + 2}" for i, column in enumerate(columns))
        row = await self.database.fetchrow(
            f"""
            UPDATE users SET {assignments}, updated_at = NOW()
            WHERE id = $1::uuid
            RETURNING {USER_COLUMNS}
            """,
            user_id, *[changes[column] for column in columns],
        )
        return build_user_from_row(row) if row else None

    async def touch_last_login(self, user_id: str, when: datetime) -> None:
        await self.database.execute(
            "UPDATE users SET last_login_at = $2 WHERE id = $1::uuid", user_id, when
        )

    async def update_role(self, user_id: str, role_id: str) -> bool:
        status = await self.database.execute(
            "UPDATE users SET role_id = $2::uuid, updated_at = NOW() WHERE id = $1::uuid",
            user_id, role_id,
        )
        return parse_command_count(status) > 0

    async def update_password(self, user_id: str, password_hash: str) -> bool:
        status = await self.database.execute(
            "UPDATE users SET password_hash = $2, updated_at = NOW() WHERE id = $1::uuid",
            user_id, password_hash,
        )
        return parse_command_count(status) > 0

    async def soft_delete(self, user_id: str, when: datetime) -> bool:
        status = await self.database.execute(
            """
            UPDATE users SET deleted_at = $2, is_active = FALSE, updated_at = NOW()
            WHERE id = $1::uuid AND deleted_at IS NULL
            """,
            user_id, when,
        )
        return parse_command_count(status) > 0
