"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import shutil
import tempfile

import pytest

from grocery_measure.data.models import Category, GroceryItem, MeasurementTriple, Quantity
from grocery_measure.data.store import InMemoryGroceryStore, SQLiteGroceryStore
from grocery_measure.service import GroceryListService


@pytest.fixture
def temp_db_dir():
    """
    Create a temporary database directory for testing.

    This fixture is automatically cleaned up after each test.
    """
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def make_item():
    """
    Factory for GroceryItems.

    Usage in tests:
        def test_something(make_item):
            item = make_item("i1", "Onion", 2, unit="cups")
    """
    def _make(
        item_id,
        sort_name,
        quantity_min=1.0,
        quantity_max=None,
        unit=None,
        checked=False,
        recipe_id="r1",
        category=Category.PRODUCE,
        metric=None,
        imperial=None,
    ):
        return GroceryItem(
            id=item_id,
            sort_name=sort_name,
            category=category,
            checked=checked,
            recipe_id=recipe_id,
            measurement=MeasurementTriple(
                original=Quantity(
                    quantity_min=quantity_min,
                    quantity_max=quantity_min if quantity_max is None else quantity_max,
                    unit=unit,
                ),
                metric=metric,
                imperial=imperial,
            ),
        )

    return _make


@pytest.fixture
def onion_items(make_item):
    """Two onion lines from different recipes plus one garlic line."""
    return [
        make_item("i1", "Yellow Onion", 2, unit="cups", recipe_id="r1"),
        make_item("i2", "Garlic", 4, 5, unit="cloves", recipe_id="r1"),
        make_item("i3", "yellow onion", 1, unit="tbsp", recipe_id="r2"),
    ]


@pytest.fixture
def memory_store():
    """Fresh in-memory store for each test."""
    return InMemoryGroceryStore()


@pytest.fixture
def sqlite_store(temp_db_dir):
    """Fresh SQLite store in a temporary directory."""
    return SQLiteGroceryStore(db_dir=temp_db_dir)


@pytest.fixture
def service(memory_store):
    """GroceryListService over the in-memory store."""
    return GroceryListService(memory_store)
