"""
Integration tests for the grocery stores.

Every test runs against both the in-memory and the SQLite store.
"""

import pytest

from grocery_measure.data.models import Category, MeasurementTriple, Quantity
from grocery_measure.data.store import InMemoryGroceryStore, SQLiteGroceryStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request, temp_db_dir):
    if request.param == "memory":
        return InMemoryGroceryStore()
    return SQLiteGroceryStore(db_dir=temp_db_dir)


class TestItems:
    """Test item persistence."""

    def test_add_and_get_in_order(self, store, onion_items):
        for item in onion_items:
            assert store.add_item("list-1", item)

        items = store.get_items("list-1")
        assert [i.id for i in items] == ["i1", "i2", "i3"]
        assert items[1].measurement.original == Quantity(4, 5, "cloves")
        assert items[1].category == Category.PRODUCE

    def test_lists_are_separate(self, store, make_item):
        store.add_item("list-1", make_item("a", "Milk"))
        assert store.get_items("list-2") == []
        assert store.get_item("list-2", "a") is None

    def test_set_checked(self, store, make_item):
        store.add_item("list-1", make_item("a", "Milk"))
        assert store.set_item_checked("list-1", "a", True)
        assert store.get_item("list-1", "a").checked is True

    def test_update_item(self, store, make_item):
        store.add_item("list-1", make_item("a", "Milk", 1, unit="cup"))
        measurement = MeasurementTriple(
            original=Quantity.single(2, "cups"),
            metric=Quantity.single(473, "ml"),
        )

        assert store.update_item("list-1", "a", {"sort_name": "Oat Milk", "measurement": measurement})

        item = store.get_item("list-1", "a")
        assert item.sort_name == "Oat Milk"
        assert item.measurement.metric == Quantity.single(473, "ml")

    def test_update_unknown_field_rejected(self, store, make_item):
        store.add_item("list-1", make_item("a", "Milk"))
        with pytest.raises(ValueError):
            store.update_item("list-1", "a", {"id": "b"})

    def test_missing_item_writes_fail(self, store):
        assert store.set_item_checked("list-1", "nope", True) is False
        assert store.update_item("list-1", "nope", {"checked": True}) is False
        assert store.delete_item("list-1", "nope") is False

    def test_delete(self, store, make_item):
        store.add_item("list-1", make_item("a", "Milk"))
        assert store.delete_item("list-1", "a")
        assert store.get_items("list-1") == []

    def test_restore_keeps_position(self, store, onion_items):
        """Test a deleted item comes back where it was, not at the end."""
        for item in onion_items:
            store.add_item("list-1", item)

        position = store.item_position("list-1", "i1")
        assert store.delete_item("list-1", "i1")
        assert store.restore_item("list-1", onion_items[0], position)

        items = store.get_items("list-1")
        assert [i.id for i in items] == ["i1", "i2", "i3"]
        assert items[0].sort_name == "Yellow Onion"

    def test_restore_without_position_appends(self, store, make_item):
        store.add_item("list-1", make_item("a", "Milk"))
        store.add_item("list-1", make_item("b", "Eggs"))

        store.delete_item("list-1", "a")
        assert store.restore_item("list-1", make_item("a", "Milk"), None)
        assert [i.id for i in store.get_items("list-1")] == ["b", "a"]

    def test_missing_item_has_no_position(self, store):
        assert store.item_position("list-1", "nope") is None


class TestPreferences:
    def test_round_trip(self, store):
        assert store.get_preference("unitPreference") is None
        assert store.set_preference("unitPreference", "metric")
        assert store.get_preference("unitPreference") == "metric"

    def test_overwrite(self, store):
        store.set_preference("unitPreference", "metric")
        store.set_preference("unitPreference", "imperial")
        assert store.get_preference("unitPreference") == "imperial"


class TestSQLitePersistence:
    def test_reopen_keeps_data(self, temp_db_dir, make_item):
        SQLiteGroceryStore(db_dir=temp_db_dir).add_item("list-1", make_item("a", "Milk", checked=True))

        reopened = SQLiteGroceryStore(db_dir=temp_db_dir)
        item = reopened.get_item("list-1", "a")
        assert item.sort_name == "Milk"
        assert item.checked is True
