"""Category hierarchy traversal.

The walk is breadth-first, one query per level, with a visited set so
corrupt data containing a cycle still terminates, and a depth cap bounding
the number of queries.
"""

import logging
from typing import List, Optional

from ....core.exceptions import ValidationError
from ..entities import CategoryRepository

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


class CategoryTree:
    def __init__(self, category_repo: CategoryRepository, max_depth: int = DEFAULT_MAX_DEPTH):
        self.category_repo = category_repo
        self.max_depth = max_depth

    async def get_descendant_ids(self, category_id: str) -> List[str]:
        """Every category below ``category_id``, nearest levels first."""
        visited = {category_id}
        descendants: List[str] = []
        frontier = [category_id]
        depth = 0

        while frontier:
            if depth >= self.max_depth:
                logger.warning(
                    f"Category {category_id} descendant walk stopped at depth {self.max_depth}"
                )
                break
            children = await self.category_repo.list_child_ids(frontier)
            frontier = []
            for child_id in children:
                if child_id in visited:
                    continue
                visited.add(child_id)
                descendants.append(child_id)
                frontier.append(child_id)
            depth += 1

        return descendants

    async def ensure_valid_parent(self, category_id: str, parent_id: Optional[str]) -> None:
        """Reject a parent that would put the category inside its own subtree."""
        if parent_id is None:
            return
        if parent_id == category_id:
            raise ValidationError("A category cannot be its own parent", field="parent_id")
        if await self.category_repo.get_by_id(parent_id) is None:
            raise ValidationError("Parent category does not exist", field="parent_id")
        if parent_id in await self.get_descendant_ids(category_id):
            raise ValidationError(
                "A category cannot be moved under one of its descendants", field="parent_id"
            )
