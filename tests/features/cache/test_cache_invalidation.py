"""Tests for event-driven cache invalidation."""

import pytest

from storefront_admin.features.cache.adapters import MemoryCache
from storefront_admin.features.cache.services import CacheInvalidationSubscriber
from storefront_admin.features.events.entities import (
    CacheClearEvent,
    CacheInvalidateEvent,
    CacheInvalidatePatternEvent,
    CategoryEvent,
    EventName,
    ProductCreatedEvent,
    ProductPriceChangedEvent,
    ProductEvent,
    RoleEvent,
    SettingsUpdatedEvent,
    UserEvent,
)
from storefront_admin.features.events.services import EventBus


@pytest.fixture
def cache():
    return MemoryCache()


@pytest.fixture
def bus(cache):
    bus = EventBus()
    CacheInvalidationSubscriber(cache).register(bus)
    return bus


def fill(cache, *keys):
    for key in keys:
        cache.set(key, key)


class TestCacheInvalidation:
    """Test the event to eviction mapping."""

    def test_category_updated(self, bus, cache):
        fill(cache, "categories:tree", "categories:list:1", "category:cat_1", "category:cat_2")

        bus.emit(EventName.CATEGORY_UPDATED, CategoryEvent(id="cat_1"))

        assert sorted(cache.keys()) == ["category:cat_2"]

    def test_category_created(self, bus, cache):
        fill(cache, "categories:tree", "category:cat_1")

        bus.emit(EventName.CATEGORY_CREATED, CategoryEvent(id="cat_9"))

        assert cache.keys() == ["category:cat_1"]

    def test_product_created(self, bus, cache):
        fill(cache, "products:list:1", "category:c1:products", "category:c2:products", "product:p0")

        bus.emit(EventName.PRODUCT_CREATED, ProductCreatedEvent(id="p1", category_id="c1"))

        assert sorted(cache.keys()) == ["category:c2:products", "product:p0"]

    def test_product_price_changed(self, bus, cache):
        fill(cache, "product:p1", "product:p2", "products:list:1", "products:featured")

        bus.emit(EventName.PRODUCT_PRICE_CHANGED,
                 ProductPriceChangedEvent(id="p1", old_price=10, new_price=12))

        assert sorted(cache.keys()) == ["product:p2", "products:featured"]

    def test_product_deleted(self, bus, cache):
        fill(cache, "product:p1", "products:featured", "product:p2")

        bus.emit(EventName.PRODUCT_DELETED, ProductEvent(id="p1"))

        assert cache.keys() == ["product:p2"]

    def test_user_updated(self, bus, cache):
        fill(cache, "user:u1", "user:u1:permissions", "user:u2")

        bus.emit(EventName.USER_UPDATED, UserEvent(id="u1"))

        assert cache.keys() == ["user:u2"]

    def test_role_changed(self, bus, cache):
        fill(cache, "user:u1:permissions", "user:u2:permissions", "user:u1")

        bus.emit(EventName.ROLE_UPDATED, RoleEvent(id="r1", name="support"))

        assert cache.keys() == ["user:u1"]

    def test_settings_updated(self, bus, cache):
        fill(cache, "settings:store_name", "settings:public", "product:p1")

        bus.emit(EventName.SETTINGS_UPDATED, SettingsUpdatedEvent(key="store_name", value="Shop"))

        assert cache.keys() == ["product:p1"]

    def test_explicit_invalidation_events(self, bus, cache):
        fill(cache, "a", "b", "c:1", "c:2", "d")

        bus.emit(EventName.CACHE_INVALIDATE, CacheInvalidateEvent(keys=("a", "b", "missing")))
        bus.emit(EventName.CACHE_INVALIDATE_PATTERN, CacheInvalidatePatternEvent(pattern="c:*"))

        assert cache.keys() == ["d"]

        bus.emit(EventName.CACHE_CLEAR_ALL, CacheClearEvent())

        assert cache.keys() == []

    def test_cache_failure_is_contained(self, bus, cache, mocker):
        mocker.patch.object(cache, "invalidate_pattern", side_effect=RuntimeError("down"))

        assert bus.emit(EventName.CATEGORY_CREATED, CategoryEvent(id="c1")) is True

    def test_failed_key_does_not_skip_the_rest(self, bus, cache, mocker):
        fill(cache, "user:u1", "user:u1:permissions", "user:u2")
        invalidate = cache.invalidate

        def flaky(key):
            if key == "user:u1":
                raise RuntimeError("down")
            return invalidate(key)

        mocker.patch.object(cache, "invalidate", side_effect=flaky)

        bus.emit(EventName.USER_UPDATED, UserEvent(id="u1"))

        assert sorted(cache.keys()) == ["user:u1", "user:u2"]

    def test_failed_key_does_not_skip_patterns(self, bus, cache, mocker):
        fill(cache, "category:c1", "categories:tree", "product:p1")
        mocker.patch.object(cache, "invalidate", side_effect=RuntimeError("down"))

        bus.emit(EventName.CATEGORY_UPDATED, CategoryEvent(id="c1"))

        assert sorted(cache.keys()) == ["category:c1", "product:p1"]
