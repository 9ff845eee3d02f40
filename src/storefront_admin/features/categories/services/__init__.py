"""Categories services package."""

from .category_tree import CategoryTree, DEFAULT_MAX_DEPTH
from .category_service import CategoryService

__all__ = ["CategoryTree", "DEFAULT_MAX_DEPTH", "CategoryService"]
