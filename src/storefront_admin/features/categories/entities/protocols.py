"""Protocol interfaces for the categories feature."""

from abc import abstractmethod
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from .category import Category


@runtime_checkable
class CategoryRepository(Protocol):
    """Protocol for category persistence."""

    @abstractmethod
    async def get_by_id(self, category_id: str) -> Optional[Category]:
        ...

    @abstractmethod
    async def list_child_ids(self, parent_ids: Sequence[str]) -> List[str]:
        """Ids of the direct children of any of ``parent_ids``."""
        ...

    @abstractmethod
    async def update_parent(self, category_id: str, parent_id: Optional[str]) -> Optional[Category]:
        ...
