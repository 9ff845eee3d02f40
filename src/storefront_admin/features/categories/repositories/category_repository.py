"""AsyncPG-based category repository implementation."""

from typing import List, Optional, Sequence
import logging

import asyncpg

from ....database import DatabaseManager
from ..entities import Category


logger = logging.getLogger(__name__)

CATEGORY_COLUMNS = """
    id, name, slug, parent_id, description, rank, is_active, created_at, updated_at
"""


def build_category_from_row(row: asyncpg.Record) -> Category:
    """Build Category entity from database row."""
    return Category(
        id=str(row["id"]),
        name=row["name"],
        slug=row["slug"],
        parent_id=str(row["parent_id"]) if row["parent_id"] else None,
        description=row["description"],
        rank=row["rank"],
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class AsyncPGCategoryRepository:
    """AsyncPG implementation of CategoryRepository protocol."""

    def __init__(self, database: DatabaseManager):
        self.database = database

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        row = await self.database.fetchrow(
            f"SELECT {CATEGORY_COLUMNS} FROM categories WHERE id = $1::uuid", category_id
        )
        return build_category_from_row(row) if row else None

    async def list_child_ids(self, parent_ids: Sequence[str]) -> List[str]:
        if not parent_ids:
            return []
        rows = await self.database.fetch(
            "SELECT id FROM categories WHERE parent_id = ANY($1::uuid[]) ORDER BY rank, name",
            list(parent_ids),
        )
        return [str(row["id"]) for row in rows]

    async def update_parent(self, category_id: str, parent_id: Optional[str]) -> Optional[Category]:
        row = await self.database.fetchrow(
            f"""
            UPDATE categories SET parent_id = $2::uuid, updated_at = NOW()
            WHERE id = $1::uuid
            RETURNING {CATEGORY_COLUMNS}
            """,
            category_id, parent_id,
        )
        return build_category_from_row(row) if row else None
