"""Categories entities package."""

from .category import Category
from .protocols import CategoryRepository

__all__ = ["Category", "CategoryRepository"]
