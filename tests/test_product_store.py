"""Tests for the product store: mutations, persistence echo, and view state."""

import json
from datetime import date
from unittest.mock import MagicMock

import pytest

from src.models import KeyValueEntry
from src.services import NotFoundError, PersistenceWriteError, ProductStore, ValidationError
from src.services.product_store import SAVE_FAILED_MESSAGE


def stored_blob(session_factory):
    session = session_factory()
    try:
        entry = session.get(KeyValueEntry, "products")
        return json.loads(entry.value) if entry else None
    finally:
        session.close()


class TestAdd:

    def test_add_to_empty_store(self, store, make_record, today):
        """Milk: cost 10, sell 20, discount 10 -> id '1', final price 18."""
        saved = store.add(make_record(), today=today)
        assert saved.id == "1"
        assert saved.final_price == pytest.approx(18)
        assert store.items == [saved]

    def test_ids_are_max_numeric_plus_one(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = [
            make_record(name="A", id="3"),
            make_record(name="B", id="10"),
            make_record(name="C", id="legacy"),
        ]
        store = ProductStore(storage)
        store.load()
        saved = store.add(make_record(name="D"), today=today)
        assert saved.id == "11"
        assert len({r.id for r in store.items}) == len(store.items)

    @pytest.mark.parametrize("odd_id", ["1e400", "inf", "-inf", "nan"])
    def test_non_finite_stored_ids_are_skipped(self, make_record, today, odd_id):
        storage = MagicMock()
        storage.read_all.return_value = [make_record(id=odd_id), make_record(id="2")]
        store = ProductStore(storage)
        store.load()

        saved = store.add(make_record(name="Bread", category="Bakery"), today=today)
        assert saved.id == "3"

    def test_large_integer_ids_keep_precision(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = [make_record(id="9007199254740993")]
        store = ProductStore(storage)
        store.load()

        assert store.add(make_record(), today=today).id == "9007199254740994"

    def test_caller_id_is_ignored(self, store, make_record, today):
        saved = store.add(make_record(id="99"), today=today)
        assert saved.id == "1"

    def test_add_persists_full_list(self, store, session_factory, make_record, today):
        store.add(make_record(name="Milk"), today=today)
        store.add(make_record(name="Bread", category="Bakery"), today=today)
        blob = stored_blob(session_factory)
        assert [item["name"] for item in blob] == ["Milk", "Bread"]
        assert blob[0]["finalPrice"] == pytest.approx(18)

    def test_add_rejects_invalid_record(self, store, make_record, today):
        with pytest.raises(ValidationError) as exc_info:
            store.add(make_record(name=" ", sell_price=0), today=today)
        assert set(exc_info.value.violations) == {"name", "sell_price"}
        assert store.items == []

    def test_add_rejects_past_expiry(self, store, make_record, today):
        with pytest.raises(ValidationError):
            store.add(make_record(expiry_date=date(2025, 12, 31)), today=today)


class TestUpdateAndRemove:

    @pytest.fixture
    def seeded(self, store, make_record, today):
        store.add(make_record(name="Milk"), today=today)
        store.add(make_record(name="Bread", category="Bakery"), today=today)
        return store

    def test_update_replaces_in_place(self, seeded, make_record, today):
        updated = make_record(name="Oat Milk", id="1", sell_price=30, discount=50)
        seeded.update(updated, today=today)
        assert [r.name for r in seeded.items] == ["Oat Milk", "Bread"]
        assert seeded.get("1").final_price == pytest.approx(15)

    def test_update_missing_id_raises(self, seeded, make_record, today):
        with pytest.raises(NotFoundError):
            seeded.update(make_record(id="42"), today=today)

    def test_remove(self, seeded, session_factory):
        seeded.remove("1")
        assert [r.id for r in seeded.items] == ["2"]
        assert [item["id"] for item in stored_blob(session_factory)] == ["2"]

    def test_bulk_remove_all(self, seeded, session_factory):
        removed = seeded.bulk_remove({"1", "2"})
        assert removed == 2
        assert seeded.items == []
        assert stored_blob(session_factory) == []

    def test_bulk_remove_empty_set_skips_storage(self, make_record):
        storage = MagicMock()
        storage.read_all.return_value = [make_record(id="1")]
        store = ProductStore(storage)
        store.load()

        assert store.bulk_remove(set()) == 0
        assert len(store.items) == 1
        storage.write_all.assert_not_called()

    def test_each_mutation_writes_once(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = []
        store = ProductStore(storage)
        store.load()

        store.add(make_record(), today=today)
        store.update(make_record(id="1", name="Skim Milk"), today=today)
        store.remove("1")
        assert storage.write_all.call_count == 3


class TestPersistenceFailure:

    def test_write_failure_sets_error_status(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = []
        storage.write_all.side_effect = PersistenceWriteError("disk full")
        store = ProductStore(storage)
        store.load()

        saved = store.add(make_record(), today=today)

        assert store.items == [saved]
        assert store.view.status == "error"
        assert store.view.error == SAVE_FAILED_MESSAGE

    def test_save_retries_and_clears_error(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = []
        storage.write_all.side_effect = [PersistenceWriteError("locked"), None]
        store = ProductStore(storage)
        store.add(make_record(), today=today)
        assert store.view.status == "error"

        assert store.save() is True
        assert store.view.status == "idle"
        assert store.view.error is None

    def test_next_successful_write_clears_error(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = []
        storage.write_all.side_effect = [PersistenceWriteError("locked"), None]
        store = ProductStore(storage)
        store.load()

        store.add(make_record(name="Milk"), today=today)
        assert store.view.status == "error"

        store.add(make_record(name="Bread", category="Bakery"), today=today)
        assert store.view.status == "idle"
        assert store.view.error is None
        assert [r.id for r in store.items] == ["1", "2"]

    def test_success_during_loading_keeps_loading(self, make_record, today):
        storage = MagicMock()
        storage.read_all.return_value = []
        store = ProductStore(storage)
        store.set_status("loading")

        store.add(make_record(), today=today)
        assert store.view.status == "loading"


class TestViewState:

    def test_setters_do_not_persist(self):
        storage = MagicMock()
        storage.read_all.return_value = []
        store = ProductStore(storage)
        store.set_search("milk")
        store.set_category("Dairy")
        store.set_sort("costPrice", "desc")
        store.set_page(3)
        storage.write_all.assert_not_called()
        assert store.view.search == "milk"
        assert store.view.category == "Dairy"
        assert store.view.sort.field == "costPrice"
        assert store.view.sort.descending
        assert store.view.page == 3

    def test_set_page_floor_is_one(self, store):
        store.set_page(0)
        assert store.view.page == 1

    def test_bad_sort_order_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_sort("name", "sideways")

    def test_error_status_invariant(self, store):
        store.set_error("Boom")
        assert (store.view.status, store.view.error) == ("error", "Boom")
        store.set_status("loading")
        assert store.view.error is None
        store.set_status("error")
        assert store.view.error is not None
        store.set_status("idle")
        assert store.view.error is None

    def test_query_clamps_page_after_filter_shrinks(self, store, make_record, today):
        for i in range(25):
            store.add(make_record(name=f"Milk {i}", category="Dairy" if i < 5 else "Bakery"), today=today)
        store.set_page(3)
        assert store.query().page == 3

        store.set_category("Dairy")
        result = store.query()
        assert result.page == 1
        assert store.view.page == 1
        assert len(result.items) == 5

    def test_query_on_empty_store_keeps_page_one(self, store):
        store.set_page(4)
        result = store.query()
        assert result.items == []
        assert store.view.page == 1
