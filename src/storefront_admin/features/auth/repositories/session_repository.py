"""AsyncPG-based session repository implementation."""

from typing import Optional
import logging

import asyncpg

from ....database import DatabaseManager, parse_command_count
from ..entities import Session


logger = logging.getLogger(__name__)

SESSION_COLUMNS = "id, token, user_id, expires_at, user_agent, ip_address, created_at"


def build_session_from_row(row: asyncpg.Record) -> Session:
    """Build Session entity from database row."""
    return Session(
        id=str(row["id"]),
        token=row["token"],
        user_id=str(row["user_id"]),
        expires_at=row["expires_at"],
        user_agent=row["user_agent"],
        ip_address=row["ip_address"],
        created_at=row["created_at"],
    )


class AsyncPGSessionRepository:
    """AsyncPG implementation of SessionRepository protocol."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def create(self, session: Session) -> Session:
        row = await self.database.fetchrow(
            f"""
            INSERT INTO sessions (token, user_id, expires_at, user_agent, ip_address)
            VALUES ($1, $2::uuid, $3, $4, $5)
            RETURNING {SESSION_COLUMNS}
            """,
            session.token,
            session.user_id,
            session.expires_at,
            session.user_agent,
            session.ip_address,
        )
        return build_session_from_row(row)

    async def find_by_token(self, token: str) -> Optional[Session]:
        row = await self.database.fetchrow(
            f"SELECT {SESSION_COLUMNS} FROM sessions WHERE token = $1", token
        )
        return build_session_from_row(row) if row else None

    async def delete_by_token(self, token: str) -> bool:
        status = await self.database.execute("DELETE FROM sessions WHERE token = $1", token)
        return parse_command_count(status) > 0

    async def delete_all_by_user_id(self, user_id: str) -> int:
        status = await self.database.execute(
            "DELETE FROM sessions WHERE user_id = $1::uuid", user_id
        )
        return parse_command_count(status)
