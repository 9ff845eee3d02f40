"""Cache services package."""

from .cache_invalidation import CacheInvalidationSubscriber
from .cache_service import cached

__all__ = ["CacheInvalidationSubscriber", "cached"]
