"""
Tests for the catalog infrastructure adapters.

The in-memory store is tested directly; the SQL mirror runs against a
throwaway SQLite file.
"""

import logging
from typing import Optional

import pytest

from products_api.core.config import Settings
from products_api.domain.catalog.entities import Product, ProductDraft, ProductFilter
from products_api.domain.catalog.ports import PersistenceError, ProductPersistence
from products_api.infrastructure.catalog.in_memory_store import InMemoryProductStore
from products_api.infrastructure.catalog.sql_persistence import (
    SqlProductPersistence,
    build_engine,
)
from products_api.main import connect_persistence


def _draft(name: str = "Mouse", category: str = "Electronics", in_stock: bool = True) -> ProductDraft:
    return ProductDraft(
        name=name,
        description=f"{name} description",
        price=19.99,
        category=category,
        in_stock=in_stock,
    )


class RecordingPersistence(ProductPersistence):
    """Keeps mirrored products in a dict; can be told to fail."""

    def __init__(self, fail: bool = False, preloaded: Optional[list[Product]] = None) -> None:
        self.fail = fail
        self.saved: dict[str, Product] = {}
        self.removed: list[str] = []
        self.preloaded = preloaded or []

    def ping(self) -> None:
        if self.fail:
            raise PersistenceError("unreachable")

    def load_all(self) -> list[Product]:
        return list(self.preloaded)

    def save(self, product: Product) -> None:
        if self.fail:
            raise PersistenceError("write failed")
        self.saved[product.id] = product

    def remove(self, product_id: str) -> None:
        if self.fail:
            raise PersistenceError("delete failed")
        self.removed.append(product_id)


class TestInMemoryProductStore:
    """Tests for InMemoryProductStore."""

    def test_create_assigns_unique_ids(self) -> None:
        store = InMemoryProductStore()
        first = store.create(_draft("A"))
        second = store.create(_draft("B"))
        assert first.id != second.id
        assert first.name == "A"

    def test_list_preserves_insertion_order(self) -> None:
        store = InMemoryProductStore()
        ids = [store.create(_draft(name)).id for name in ("C", "A", "B")]
        assert [p.id for p in store.list_products()] == ids

    def test_list_applies_filter(self) -> None:
        store = InMemoryProductStore()
        store.create(_draft("Mouse", "Electronics"))
        store.create(_draft("Novel", "Books"))
        result = store.list_products(ProductFilter(category="books"))
        assert [p.name for p in result] == ["Novel"]

    def test_find_by_id(self) -> None:
        store = InMemoryProductStore()
        product = store.create(_draft())
        assert store.find_by_id(product.id) == product
        assert store.find_by_id("missing") is None

    def test_update_changes_only_supplied_fields(self) -> None:
        store = InMemoryProductStore()
        product = store.create(_draft())
        updated = store.update(product.id, {"price": 5.0, "id": "hijacked"})
        assert updated is not None
        assert updated.id == product.id
        assert updated.price == 5.0
        assert updated.name == product.name
        assert store.find_by_id(product.id) == updated

    def test_update_keeps_position(self) -> None:
        store = InMemoryProductStore()
        ids = [store.create(_draft(name)).id for name in ("A", "B", "C")]
        store.update(ids[1], {"name": "B2"})
        assert [p.name for p in store.list_products()] == ["A", "B2", "C"]

    def test_update_missing_returns_none(self) -> None:
        assert InMemoryProductStore().update("missing", {"name": "x"}) is None

    def test_delete_is_not_repeatable(self) -> None:
        store = InMemoryProductStore()
        product = store.create(_draft())
        assert store.delete(product.id) is True
        assert store.delete(product.id) is False
        assert store.find_by_id(product.id) is None

    def test_ids_are_never_reused(self) -> None:
        store = InMemoryProductStore()
        seen = set()
        for _ in range(20):
            product = store.create(_draft())
            assert product.id not in seen
            seen.add(product.id)
            store.delete(product.id)

    def test_stats(self) -> None:
        store = InMemoryProductStore()
        store.create(_draft("A", "Electronics"))
        store.create(_draft("B", "Electronics", in_stock=False))
        store.create(_draft("C", "Books"))
        stats = store.stats()
        assert stats.total == 3
        assert stats.in_stock == 2
        assert stats.by_category == {"Electronics": 2, "Books": 1}

    def test_returned_products_cannot_mutate_the_store(self) -> None:
        store = InMemoryProductStore()
        product = store.create(_draft())
        with pytest.raises(AttributeError):
            product.name = "changed"  # type: ignore[misc]
        listing = store.list_products()
        listing.clear()
        assert len(store.list_products()) == 1


class TestStoreMirroring:
    """Mutations are mirrored on a best-effort basis."""

    def test_mutations_are_mirrored(self) -> None:
        mirror = RecordingPersistence()
        store = InMemoryProductStore(persistence=mirror)
        product = store.create(_draft())
        store.update(product.id, {"name": "Renamed"})
        store.delete(product.id)
        assert mirror.saved[product.id].name == "Renamed"
        assert mirror.removed == [product.id]

    def test_mirror_failure_does_not_fail_the_operation(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        store = InMemoryProductStore(persistence=RecordingPersistence(fail=True))
        with caplog.at_level(logging.WARNING):
            product = store.create(_draft())
            assert store.delete(product.id) is True
        assert "Could not persist product" in caplog.text
        assert "Could not remove persisted product" in caplog.text

    def test_hydrate_skips_known_ids(self) -> None:
        store = InMemoryProductStore()
        product = Product("p-1", "A", "a", 1.0, "X", True)
        assert store.hydrate([product, product]) == 1
        assert store.list_products() == [product]


class TestConnectPersistence:
    """Tests for the startup connection step."""

    def test_hydrates_from_reachable_mirror(self) -> None:
        product = Product("p-1", "A", "a", 1.0, "X", True)
        store = InMemoryProductStore(persistence=RecordingPersistence(preloaded=[product]))
        connect_persistence(store, Settings(_env_file=None))
        assert store.find_by_id("p-1") == product

    def test_unreachable_optional_mirror_is_detached(self) -> None:
        store = InMemoryProductStore(persistence=RecordingPersistence(fail=True))
        connect_persistence(store, Settings(_env_file=None, database_required=False))
        assert store.persistence is None
        store.create(_draft())

    def test_unreachable_required_mirror_refuses_start(self) -> None:
        store = InMemoryProductStore(persistence=RecordingPersistence(fail=True))
        with pytest.raises(PersistenceError):
            connect_persistence(store, Settings(_env_file=None, database_required=True))

    def test_no_mirror_is_a_no_op(self) -> None:
        store = InMemoryProductStore()
        connect_persistence(store, Settings(_env_file=None))
        assert store.list_products() == []


@pytest.fixture
def sql_persistence(tmp_path) -> SqlProductPersistence:
    persistence = SqlProductPersistence(build_engine(f"sqlite:///{tmp_path / 'products.db'}"))
    persistence.ping()
    return persistence


class TestSqlProductPersistence:
    """Tests for SqlProductPersistence against SQLite."""

    def test_save_and_load_in_insertion_order(self, sql_persistence) -> None:
        first = Product("id-b", "B", "b", 2.5, "Books", False)
        second = Product("id-a", "A", "a", 1.25, "Electronics", True)
        sql_persistence.save(first)
        sql_persistence.save(second)
        assert sql_persistence.load_all() == [first, second]

    def test_save_replaces_existing_row(self, sql_persistence) -> None:
        product = Product("id-1", "A", "a", 1.0, "X", True)
        sql_persistence.save(product)
        sql_persistence.save(Product("id-2", "B", "b", 2.0, "Y", True))
        sql_persistence.save(Product("id-1", "A2", "a", 3.0, "X", False))
        loaded = sql_persistence.load_all()
        assert [p.id for p in loaded] == ["id-1", "id-2"]
        assert loaded[0].name == "A2"
        assert loaded[0].in_stock is False

    def test_remove(self, sql_persistence) -> None:
        sql_persistence.save(Product("id-1", "A", "a", 1.0, "X", True))
        sql_persistence.remove("id-1")
        sql_persistence.remove("id-1")
        assert sql_persistence.load_all() == []

    def test_store_round_trip_through_restart(self, sql_persistence) -> None:
        store = InMemoryProductStore(persistence=sql_persistence)
        kept = store.create(_draft("Kept"))
        dropped = store.create(_draft("Dropped"))
        store.delete(dropped.id)

        restarted = InMemoryProductStore(persistence=sql_persistence)
        connect_persistence(restarted, Settings(_env_file=None))
        assert restarted.list_products() == [kept]

    def test_unreachable_database_raises_persistence_error(self, tmp_path) -> None:
        missing_dir = tmp_path / "missing" / "products.db"
        persistence = SqlProductPersistence(build_engine(f"sqlite:///{missing_dir}"))
        with pytest.raises(PersistenceError):
            persistence.ping()
