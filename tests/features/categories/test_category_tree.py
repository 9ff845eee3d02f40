"""Tests for category hierarchy traversal and moves."""

import logging

import pytest

from storefront_admin.core.exceptions import NotFoundError, ValidationError
from storefront_admin.features.categories.services import CategoryTree


@pytest.fixture
def tree(category_repo):
    #   root
    #   ├── a
    #   │   ├── a1
    #   │   │   └── a1x
    #   │   └── a2
    #   └── b
    category_repo.add("root")
    category_repo.add("a", "root")
    category_repo.add("b", "root")
    category_repo.add("a1", "a")
    category_repo.add("a2", "a")
    category_repo.add("a1x", "a1")
    return CategoryTree(category_repo)


class TestCategoryTree:
    """Test the breadth-first descendant walk."""

    @pytest.mark.asyncio
    async def test_descendants_by_level(self, tree, category_repo):
        descendants = await tree.get_descendant_ids("root")

        assert descendants[:2] == ["a", "b"]
        assert set(descendants[2:4]) == {"a1", "a2"}
        assert descendants[4:] == ["a1x"]
        # one query per level plus the empty last one
        assert category_repo.child_queries == 4

    @pytest.mark.asyncio
    async def test_leaf_has_no_descendants(self, tree):
        assert await tree.get_descendant_ids("a1x") == []

    @pytest.mark.asyncio
    async def test_cycle_terminates(self, category_repo):
        category_repo.add("x", "z")
        category_repo.add("y", "x")
        category_repo.add("z", "y")

        descendants = await CategoryTree(category_repo).get_descendant_ids("x")

        assert descendants == ["y", "z"]

    @pytest.mark.asyncio
    async def test_depth_cap(self, category_repo, caplog):
        category_repo.add("c0")
        for i in range(1, 10):
            category_repo.add(f"c{i}", f"c{i - 1}")

        with caplog.at_level(logging.WARNING):
            descendants = await CategoryTree(category_repo, max_depth=3).get_descendant_ids("c0")

        assert descendants == ["c1", "c2", "c3"]
        assert category_repo.child_queries == 3
        assert any("stopped at depth 3" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_ensure_valid_parent(self, tree):
        await tree.ensure_valid_parent("a1", "b")
        await tree.ensure_valid_parent("a1", None)

        for category_id, parent_id in [("a", "a"), ("a", "a1x"), ("a", "missing")]:
            with pytest.raises(ValidationError) as exc_info:
                await tree.ensure_valid_parent(category_id, parent_id)
            assert exc_info.value.fields == ["parent_id"]


class TestCategoryService:
    """Test category reads and moves through the service."""

    @pytest.mark.asyncio
    async def test_move_evicts_cache(self, services, make_user, tree, store):
        admin = make_user("product_manager")
        await services.category_service.get_category(admin, "a1")
        services.cache.set("categories:tree", ["root"])
        services.cache.set("category:b", {"id": "b"})

        moved = await services.category_service.move_category(admin, "a1", "b")

        assert moved.parent_id == "b"
        assert store.categories["a1"].parent_id == "b"
        assert sorted(services.cache.keys()) == ["category:b"]

    @pytest.mark.asyncio
    async def test_move_under_descendant_is_rejected(self, services, make_user, tree):
        with pytest.raises(ValidationError):
            await services.category_service.move_category(make_user("product_manager"), "a", "a1x")

    @pytest.mark.asyncio
    async def test_missing_category(self, services, make_user, tree):
        with pytest.raises(NotFoundError):
            await services.category_service.get_category(make_user("product_manager"), "missing")
