"""Integration tests for the ProductStore against an in-memory catalog."""

import threading

import pytest

from catalog.application.dto import NewProduct
from catalog.application.product_store import ProductStore
from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import DEFAULT_CATEGORY
from tests.fakes import FakeCatalogRepository, FakeClock


def _setup():
    repo = FakeCatalogRepository()
    store = ProductStore(repo, clock=FakeClock())
    return repo, store


def _create(store: ProductStore, name: str = "Widget", price="9.99", **extra):
    return store.create(NewProduct(name=name, price=price, **extra))


class TestListAndGet:

    def test_list_on_empty_catalog(self):
        _, store = _setup()
        assert store.list_all() == []

    def test_list_preserves_insertion_order(self):
        _, store = _setup()
        for name in ("C", "A", "B"):
            _create(store, name)
        assert [p.name for p in store.list_all()] == ["C", "A", "B"]

    def test_get_accepts_text_ids(self):
        _, store = _setup()
        created = _create(store)
        assert store.get(str(created.id)) == created
        assert store.get(created.id) == created

    def test_get_missing_returns_none(self):
        _, store = _setup()
        _create(store)
        assert store.get(42) is None
        for bad_id in ("not-a-number", "--3", "+-1", "\u00b2"):
            assert store.get(bad_id) is None
            assert store.update(bad_id, {"name": "X"}) is None
            assert store.delete(bad_id) is None


class TestCreate:

    def test_first_id_is_one(self):
        _, store = _setup()
        assert _create(store).id == 1

    def test_ids_are_unique(self):
        _, store = _setup()
        ids = [_create(store, f"P{i}").id for i in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_round_trip_defaults(self):
        _, store = _setup()
        created = _create(store, "Widget", 9.99)

        product = store.get(created.id)
        assert product.description == ""
        assert product.category == DEFAULT_CATEGORY
        assert product.stock == 0
        assert product.price == 9.99
        assert product.created_at == product.updated_at

    def test_create_is_persisted(self):
        repo, store = _setup()
        _create(store)
        assert repo.save_count == 1
        assert len(repo.stored) == 1

    def test_deleting_highest_id_reissues_it(self):
        _, store = _setup()
        for name in ("A", "B", "C"):
            _create(store, name)
        store.delete(3)
        assert _create(store, "D").id == 3

    def test_configured_default_category(self):
        repo = FakeCatalogRepository()
        store = ProductStore(repo, default_category="Misc")
        assert _create(store).category == "Misc"

    def test_store_trusts_caller_on_range(self):
        _, store = _setup()
        assert _create(store, price=-5).price == -5.0

    def test_uncoercible_price_rejected(self):
        repo, store = _setup()
        with pytest.raises(ValidationError):
            _create(store, price="cheap")
        assert repo.save_count == 0


class TestUpdate:

    def test_partial_update_leaves_other_fields(self):
        _, store = _setup()
        created = _create(store, "Widget", "5", description="Blue", stock=2)

        updated = store.update(created.id, {"price": "6.5"})

        assert updated.price == 6.5
        assert updated.name == "Widget"
        assert updated.description == "Blue"
        assert updated.stock == 2
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    def test_update_is_persisted(self):
        _, store = _setup()
        created = _create(store)
        store.update(created.id, {"name": "Gadget"})
        assert store.get(created.id).name == "Gadget"

    def test_repeated_updates_never_move_updated_at_backwards(self):
        _, store = _setup()
        _create(store, "A")
        created = _create(store, "B")

        first = store.update(created.id, {"stock": 5})
        second = store.update(created.id, {"stock": 5})

        assert second.updated_at >= first.updated_at

    def test_update_without_known_fields_refreshes_timestamp(self):
        _, store = _setup()
        created = _create(store)
        updated = store.update(created.id, {"colour": "red"})
        assert updated.updated_at > created.updated_at
        assert updated.name == created.name

    def test_update_missing_returns_none(self):
        repo, store = _setup()
        assert store.update(3, {"name": "X"}) is None
        assert repo.save_count == 0


class TestDelete:

    def test_delete_returns_removed_product(self):
        _, store = _setup()
        created = _create(store)
        assert store.delete(created.id) == created
        assert store.get(created.id) is None

    def test_delete_preserves_order(self):
        _, store = _setup()
        a = _create(store, "A")
        _create(store, "B")
        store.delete(a.id)
        assert [p.name for p in store.list_all()] == ["B"]

    def test_delete_missing_returns_none(self):
        _, store = _setup()
        assert store.delete(1) is None
        assert store.delete("x") is None


class TestDurability:

    def test_failed_save_still_returns_result(self):
        repo, store = _setup()
        repo.fail_writes = True

        product = _create(store)

        assert product.id == 1
        assert store.list_all() == []


class TestConcurrency:

    def test_parallel_creates_get_distinct_ids(self):
        repo = FakeCatalogRepository()
        store = ProductStore(repo)

        threads = [
            threading.Thread(target=_create, args=(store, f"P{i}")) for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [p.id for p in store.list_all()]
        assert sorted(ids) == list(range(1, 21))
