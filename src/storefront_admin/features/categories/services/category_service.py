"""Category administration."""

import logging
from typing import Optional

from ....config.constants import CacheKeys, PermissionAction
from ....core.exceptions import NotFoundError
from ...cache.services import cached
from ...events.entities import CategoryEvent, EventMeta, EventName
from ...permissions.services import ensure_permission
from ..entities import Category, CategoryRepository
from .category_tree import CategoryTree

logger = logging.getLogger(__name__)

CATEGORIES_RESOURCE = "categories"


class CategoryService:
    def __init__(self, category_repo: CategoryRepository, tree: CategoryTree, cache, event_bus):
        self.category_repo = category_repo
        self.tree = tree
        self.cache = cache
        self.event_bus = event_bus

    async def get_category(self, actor, category_id: str) -> Category:
        ensure_permission(actor, CATEGORIES_RESOURCE, PermissionAction.READ)
        category = await cached(
            self.cache,
            CacheKeys.category(category_id),
            lambda: self.category_repo.get_by_id(category_id),
        )
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def move_category(self, actor, category_id: str, parent_id: Optional[str]) -> Category:
        """Re-parent a category; ``None`` makes it a root."""
        ensure_permission(actor, CATEGORIES_RESOURCE, PermissionAction.UPDATE)

        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)

        await self.tree.ensure_valid_parent(category_id, parent_id)

        updated = await self.category_repo.update_parent(category_id, parent_id)
        if updated is None:
            raise NotFoundError("Category", category_id)
        logger.info(f"Category {category_id} moved under {parent_id} by {actor.id}")

        self.event_bus.emit(
            EventName.CATEGORY_UPDATED,
            CategoryEvent(id=updated.id, name=updated.name, meta=EventMeta(user_id=actor.id)),
        )
        return updated
