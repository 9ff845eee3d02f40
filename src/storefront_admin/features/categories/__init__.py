"""Categories feature."""

from .entities import Category, CategoryRepository
from .services import CategoryTree, CategoryService
from .repositories import AsyncPGCategoryRepository

__all__ = [
    "Category",
    "CategoryRepository",
    "CategoryTree",
    "CategoryService",
    "AsyncPGCategoryRepository",
]
