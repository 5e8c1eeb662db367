"""
Storage for grocery list items and user preferences.

GroceryStore is the contract the service layer writes through. Two
implementations ship with the package:
- InMemoryGroceryStore: dict-backed, for tests and embedding
- SQLiteGroceryStore: grocery.db with grocery_items and user_preferences
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Category, GroceryItem, MeasurementTriple

logger = logging.getLogger(__name__)


# Columns an edit is allowed to change
UPDATABLE_FIELDS = {"sort_name", "name", "category", "checked", "measurement"}


def apply_changes(item: GroceryItem, changes: Dict[str, Any]) -> GroceryItem:
    """Return a copy of item with the given field changes applied."""
    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Cannot update fields: {sorted(unknown)}")

    values = dict(changes)
    if "category" in values:
        values["category"] = Category.resolve(values["category"])
    if "measurement" in values and isinstance(values["measurement"], dict):
        values["measurement"] = MeasurementTriple.from_dict(values["measurement"])
    return replace(item, **values)


class GroceryStore(ABC):
    """Persistence contract for grocery list items.

    Write methods return True on success and False when the item does not
    exist or the write failed.
    """

    @abstractmethod
    def get_items(self, list_id: str) -> List[GroceryItem]:
        """Return all items of a list in stored order."""

    @abstractmethod
    def get_item(self, list_id: str, item_id: str) -> Optional[GroceryItem]:
        """Return one item, or None."""

    @abstractmethod
    def add_item(self, list_id: str, item: GroceryItem) -> bool:
        """Add an item to a list."""

    @abstractmethod
    def set_item_checked(self, list_id: str, item_id: str, checked: bool) -> bool:
        """Set the checked flag of one item."""

    @abstractmethod
    def update_item(self, list_id: str, item_id: str, changes: Dict[str, Any]) -> bool:
        """Apply field changes to one item."""

    @abstractmethod
    def delete_item(self, list_id: str, item_id: str) -> bool:
        """Remove one item."""

    @abstractmethod
    def item_position(self, list_id: str, item_id: str) -> Optional[int]:
        """Return where an item sits in stored order, or None.

        The value is only meaningful to restore_item on the same store.
        """

    @abstractmethod
    def restore_item(self, list_id: str, item: GroceryItem, position: Optional[int]) -> bool:
        """Put a deleted item back at a position from item_position.

        A None position appends the item like add_item.
        """

    @abstractmethod
    def get_preference(self, key: str) -> Optional[str]:
        """Read a user preference."""

    @abstractmethod
    def set_preference(self, key: str, value: str) -> bool:
        """Write a user preference."""


class InMemoryGroceryStore(GroceryStore):
    """Dict-backed store. Item order is insertion order."""

    def __init__(self):
        self._lists: Dict[str, Dict[str, GroceryItem]] = {}
        self._preferences: Dict[str, str] = {}

    def get_items(self, list_id: str) -> List[GroceryItem]:
        return list(self._lists.get(list_id, {}).values())

    def get_item(self, list_id: str, item_id: str) -> Optional[GroceryItem]:
        return self._lists.get(list_id, {}).get(item_id)

    def add_item(self, list_id: str, item: GroceryItem) -> bool:
        self._lists.setdefault(list_id, {})[item.id] = item
        return True

    def set_item_checked(self, list_id: str, item_id: str, checked: bool) -> bool:
        return self.update_item(list_id, item_id, {"checked": checked})

    def update_item(self, list_id: str, item_id: str, changes: Dict[str, Any]) -> bool:
        items = self._lists.get(list_id, {})
        if item_id not in items:
            return False
        items[item_id] = apply_changes(items[item_id], changes)
        return True

    def delete_item(self, list_id: str, item_id: str) -> bool:
        return self._lists.get(list_id, {}).pop(item_id, None) is not None

    def item_position(self, list_id: str, item_id: str) -> Optional[int]:
        items = self._lists.get(list_id, {})
        if item_id not in items:
            return None
        return list(items).index(item_id)

    def restore_item(self, list_id: str, item: GroceryItem, position: Optional[int]) -> bool:
        items = self._lists.setdefault(list_id, {})
        if position is None:
            items[item.id] = item
            return True

        entries = [(key, value) for key, value in items.items() if key != item.id]
        entries.insert(min(position, len(entries)), (item.id, item))
        self._lists[list_id] = dict(entries)
        return True

    def get_preference(self, key: str) -> Optional[str]:
        return self._preferences.get(key)

    def set_preference(self, key: str, value: str) -> bool:
        self._preferences[key] = value
        return True


class SQLiteGroceryStore(GroceryStore):
    """SQLite-backed store."""

    def __init__(self, db_dir: str = "data"):
        """
        Initialize the store.

        Args:
            db_dir: Directory holding grocery.db (created if missing)
        """
        self.db_dir = Path(db_dir)
        self.db_dir.mkdir(parents=True, exist_ok=True)
        self.db_path = self.db_dir / "grocery.db"

        self._init_database()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_database(self):
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS grocery_items (
                    position INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL,
                    list_id TEXT NOT NULL,
                    recipe_id TEXT,
                    name TEXT,
                    sort_name TEXT NOT NULL,
                    category TEXT,
                    checked BOOLEAN DEFAULT 0,

                    original_quantity_min REAL,
                    original_quantity_max REAL,
                    original_unit TEXT,
                    metric_quantity_min REAL,
                    metric_quantity_max REAL,
                    metric_unit TEXT,
                    imperial_quantity_min REAL,
                    imperial_quantity_max REAL,
                    imperial_unit TEXT,

                    created_at TEXT NOT NULL,
                    UNIQUE (list_id, id)
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS user_preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_grocery_items_list
                ON grocery_items(list_id)
            """)

            conn.commit()

    def get_items(self, list_id: str) -> List[GroceryItem]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM grocery_items WHERE list_id = ? ORDER BY position",
                (list_id,),
            ).fetchall()
        return [GroceryItem.from_row(dict(row)) for row in rows]

    def get_item(self, list_id: str, item_id: str) -> Optional[GroceryItem]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM grocery_items WHERE list_id = ? AND id = ?",
                (list_id, item_id),
            ).fetchone()
        return GroceryItem.from_row(dict(row)) if row else None

    def _write_row(self, conn: sqlite3.Connection, list_id: str, item: GroceryItem,
                   position: Optional[int] = None):
        row = item.to_row()
        row["checked"] = 1 if row["checked"] else 0
        row["list_id"] = list_id
        row["created_at"] = datetime.now().isoformat()
        if position is not None:
            row["position"] = position
        columns = ", ".join(row)
        placeholders = ", ".join("?" for _ in row)
        conn.execute(
            f"INSERT INTO grocery_items ({columns}) VALUES ({placeholders})",
            tuple(row.values()),
        )

    def add_item(self, list_id: str, item: GroceryItem) -> bool:
        try:
            with self._connect() as conn:
                self._write_row(conn, list_id, item)
            logger.info(f"Added grocery item {item.id} to list {list_id}")
            return True
        except sqlite3.Error as e:
            logger.error(f"Error adding grocery item {item.id}: {e}")
            return False

    def set_item_checked(self, list_id: str, item_id: str, checked: bool) -> bool:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "UPDATE grocery_items SET checked = ? WHERE list_id = ? AND id = ?",
                    (1 if checked else 0, list_id, item_id),
                )
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Error updating grocery item {item_id}: {e}")
            return False

    def update_item(self, list_id: str, item_id: str, changes: Dict[str, Any]) -> bool:
        item = self.get_item(list_id, item_id)
        if item is None:
            return False

        updated = apply_changes(item, changes)
        row = updated.to_row()
        row["checked"] = 1 if row["checked"] else 0
        row.pop("id")
        assignments = ", ".join(f"{column} = ?" for column in row)

        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    f"UPDATE grocery_items SET {assignments} WHERE list_id = ? AND id = ?",
                    (*row.values(), list_id, item_id),
                )
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Error updating grocery item {item_id}: {e}")
            return False

    def delete_item(self, list_id: str, item_id: str) -> bool:
        try:
            with self._connect() as conn:
                cursor = conn.execute(
                    "DELETE FROM grocery_items WHERE list_id = ? AND id = ?",
                    (list_id, item_id),
                )
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error(f"Error deleting grocery item {item_id}: {e}")
            return False

    def item_position(self, list_id: str, item_id: str) -> Optional[int]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT position FROM grocery_items WHERE list_id = ? AND id = ?",
                (list_id, item_id),
            ).fetchone()
        return row["position"] if row else None

    def restore_item(self, list_id: str, item: GroceryItem, position: Optional[int]) -> bool:
        # A freed position is never reused by AUTOINCREMENT, so writing it back is safe
        try:
            with self._connect() as conn:
                self._write_row(conn, list_id, item, position)
            logger.info(f"Restored grocery item {item.id} to list {list_id} at {position}")
            return True
        except sqlite3.Error as e:
            logger.error(f"Error restoring grocery item {item.id}: {e}")
            return False

    def get_preference(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM user_preferences WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else None

    def set_preference(self, key: str, value: str) -> bool:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT OR REPLACE INTO user_preferences (key, value, updated_at)
                    VALUES (?, ?, ?)
                    """,
                    (key, value, datetime.now().isoformat()),
                )
            return True
        except sqlite3.Error as e:
            logger.error(f"Error saving preference {key}: {e}")
            return False
