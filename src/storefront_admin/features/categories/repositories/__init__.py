"""Categories repositories package."""

from .category_repository import AsyncPGCategoryRepository

__all__ = ["AsyncPGCategoryRepository"]
