"""Cache invalidation driven by domain events.

Each write-side event evicts the cache entries that may now be stale:

    category:created                 -> categories:*
    category:updated|deleted         -> categories:*, category:<id>
    product:created                  -> products:*, category:<category_id>:products
    product:updated|price|stock      -> product:<id>, products:list:*
    product:deleted                  -> product:<id>, products:*
    user:updated|deleted             -> user:<id>, user:<id>:permissions
    role:updated|deleted             -> user:*:permissions
    settings:updated                 -> settings:<key>, settings:*
    cache:invalidate                 -> each listed key
    cache:invalidate:pattern         -> the pattern
    cache:clear:all                  -> everything

Handlers are synchronous so eviction is complete when ``emit`` returns.
"""

import logging
from typing import Callable, Dict, Iterable, List

from ....config.constants import CacheKeys
from ...events.entities import EventName
from ..adapters import MemoryCache

logger = logging.getLogger(__name__)


class CacheInvalidationSubscriber:
    """Maps events onto cache evictions."""

    def __init__(self, cache: MemoryCache):
        self.cache = cache

    def handlers(self) -> Dict[EventName, Callable]:
        return {
            EventName.CATEGORY_CREATED: self.on_category_created,
            EventName.CATEGORY_UPDATED: self.on_category_changed,
            EventName.CATEGORY_DELETED: self.on_category_changed,
            EventName.PRODUCT_CREATED: self.on_product_created,
            EventName.PRODUCT_UPDATED: self.on_product_changed,
            EventName.PRODUCT_PRICE_CHANGED: self.on_product_changed,
            EventName.PRODUCT_STOCK_CHANGED: self.on_product_changed,
            EventName.PRODUCT_DELETED: self.on_product_deleted,
            EventName.USER_UPDATED: self.on_user_changed,
            EventName.USER_DELETED: self.on_user_changed,
            EventName.ROLE_UPDATED: self.on_role_changed,
            EventName.ROLE_DELETED: self.on_role_changed,
            EventName.SETTINGS_UPDATED: self.on_settings_updated,
            EventName.CACHE_INVALIDATE: self.on_invalidate,
            EventName.CACHE_INVALIDATE_PATTERN: self.on_invalidate_pattern,
            EventName.CACHE_CLEAR_ALL: self.on_clear_all,
        }

    def register(self, bus) -> List[Callable[[], bool]]:
        """Subscribe every handler on ``bus``; returns the unsubscribe callables."""
        return [bus.subscribe(name, handler) for name, handler in self.handlers().items()]

    # Eviction primitives

    def _evict(self, keys: Iterable[str] = (), patterns: Iterable[str] = ()) -> None:
        for key in keys:
            try:
                self.cache.invalidate(key)
            except Exception as e:
                logger.error(f"Cache invalidation of {key} failed: {e}")
        for pattern in patterns:
            try:
                self.cache.invalidate_pattern(pattern)
            except Exception as e:
                logger.error(f"Cache invalidation of pattern {pattern} failed: {e}")

    # Handlers

    def on_category_created(self, payload) -> None:
        self._evict(patterns=[CacheKeys.CATEGORIES_PATTERN])

    def on_category_changed(self, payload) -> None:
        self._evict(keys=[CacheKeys.category(payload.id)], patterns=[CacheKeys.CATEGORIES_PATTERN])

    def on_product_created(self, payload) -> None:
        self._evict(
            keys=[CacheKeys.category_products(payload.category_id)],
            patterns=[CacheKeys.PRODUCTS_PATTERN],
        )

    def on_product_changed(self, payload) -> None:
        self._evict(keys=[CacheKeys.product(payload.id)], patterns=[CacheKeys.PRODUCT_LISTS_PATTERN])

    def on_product_deleted(self, payload) -> None:
        self._evict(keys=[CacheKeys.product(payload.id)], patterns=[CacheKeys.PRODUCTS_PATTERN])

    def on_user_changed(self, payload) -> None:
        self._evict(keys=[CacheKeys.user(payload.id), CacheKeys.user_permissions(payload.id)])

    def on_role_changed(self, payload) -> None:
        self._evict(patterns=[CacheKeys.USER_PERMISSIONS_PATTERN])

    def on_settings_updated(self, payload) -> None:
        self._evict(keys=[CacheKeys.setting(payload.key)], patterns=[CacheKeys.SETTINGS_PATTERN])

    def on_invalidate(self, payload) -> None:
        self._evict(keys=payload.keys)

    def on_invalidate_pattern(self, payload) -> None:
        self._evict(patterns=[payload.pattern])

    def on_clear_all(self, payload) -> None:
        try:
            self.cache.clear()
        except Exception as e:
            logger.error(f"Cache clear failed: {e}")
