"""
Grocery list service.

The in-process API that UI and API-route code calls. Reads go through
the display helpers; writes go through a GroceryStore. Operations that
touch several stored items (every constituent of a condensed entry, a
batch of edits) are all-or-nothing: the first failed write stops the
batch and the writes already made are reverted.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from .categories import categorize
from .condenser import SORT_BY_AISLE, DisplayItem, group_for_display
from .config import UNIT_PREFERENCE_KEY, get_settings
from .data.models import CondensedIngredient, GroceryItem, UnitPreference
from .data.store import GroceryStore
from .ingest import build_measurement, items_from_recipe
from .parsing import clean_ingredient_name, parse_embedded_quantity
from .validation import validate_quantity

logger = logging.getLogger(__name__)


@dataclass
class _Step:
    """One store write plus the write that undoes it."""
    item_id: str
    apply: Callable[[], bool]
    revert: Callable[[], bool]


class GroceryListService:
    """Grocery list workflows over a GroceryStore."""

    def __init__(self, store: GroceryStore):
        """
        Initialize the service.

        Args:
            store: Storage backend for items and preferences
        """
        self.store = store

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def get_unit_preference(self) -> UnitPreference:
        stored = self.store.get_preference(UNIT_PREFERENCE_KEY)
        if stored is None:
            return get_settings().unit_preference
        return UnitPreference.resolve(stored)

    def set_unit_preference(self, value: Union[str, UnitPreference]) -> Dict[str, Any]:
        preference = UnitPreference.resolve(value)
        if not self.store.set_preference(UNIT_PREFERENCE_KEY, preference.value):
            return {"success": False, "error": "Failed to save unit preference"}
        return {"success": True, "preference": preference.value}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def add_recipe_ingredients(self, list_id: str, recipe_id: str, lines: List[str]) -> Dict[str, Any]:
        """
        Add a recipe's ingredient lines to a list.

        Args:
            list_id: Grocery list ID
            recipe_id: Recipe the lines belong to
            lines: Raw ingredient lines

        Returns:
            Dict with success status and the created items
        """
        items = items_from_recipe(recipe_id, lines)
        added = []
        for item in items:
            if not self.store.add_item(list_id, item):
                logger.error(f"[ADD] Failed to add '{item.sort_name}' to list {list_id}")
                return {
                    "success": False,
                    "error": f"Failed to add {item.sort_name}",
                    "items": added,
                }
            added.append(item)

        logger.info(f"[ADD] Added {len(added)} items from recipe {recipe_id} to list {list_id}")
        return {"success": True, "items": added}

    def render(
        self,
        list_id: str,
        sort_by: str = SORT_BY_AISLE,
        preference: Optional[Union[str, UnitPreference]] = None,
        recipe_names: Optional[Dict[str, str]] = None,
    ) -> Dict[str, List[DisplayItem]]:
        """Display sections for a list. Uses the saved unit preference when none is given."""
        if preference is None:
            preference = self.get_unit_preference()
        return group_for_display(self.store.get_items(list_id), sort_by, preference, recipe_names)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _run_steps(self, tag: str, steps: List[_Step]) -> Optional[str]:
        """
        Apply steps in order, reverting applied ones on the first failure.

        Returns:
            None on success, otherwise the id of the item that failed
        """
        applied: List[_Step] = []
        for step in steps:
            try:
                ok = step.apply()
            except Exception as e:
                logger.error(f"[{tag}] Store error on item {step.item_id}: {e}", exc_info=True)
                ok = False

            if not ok:
                logger.error(f"[{tag}] Failed on item {step.item_id}, reverting {len(applied)} writes")
                for done in reversed(applied):
                    try:
                        if not done.revert():
                            logger.error(f"[{tag}] Could not revert item {done.item_id}")
                    except Exception as e:
                        logger.error(f"[{tag}] Could not revert item {done.item_id}: {e}", exc_info=True)
                return step.item_id
            applied.append(step)
        return None

    def toggle_item(self, list_id: str, item_id: str) -> Dict[str, Any]:
        """Flip the checked state of one item."""
        item = self.store.get_item(list_id, item_id)
        if item is None:
            return {"success": False, "error": f"Item {item_id} not found"}

        if not self.store.set_item_checked(list_id, item_id, not item.checked):
            logger.error(f"[TOGGLE] Failed to update item {item_id}")
            return {"success": False, "error": f"Failed to update item {item_id}"}

        logger.info(f"[TOGGLE] item={item_id} checked={not item.checked}")
        return {"success": True, "checked": not item.checked}

    def toggle_condensed_item(self, list_id: str, condensed: CondensedIngredient) -> Dict[str, Any]:
        """
        Check or uncheck every item behind a condensed entry.

        The new state is the opposite of the condensed entry's state, so a
        partly checked group becomes fully checked.

        Returns:
            Dict with success status and the new checked state
        """
        new_state = not condensed.checked

        def make_step(item: GroceryItem) -> _Step:
            return _Step(
                item_id=item.id,
                apply=lambda: self.store.set_item_checked(list_id, item.id, new_state),
                revert=lambda: self.store.set_item_checked(list_id, item.id, item.checked),
            )

        failed_id = self._run_steps("TOGGLE", [make_step(item) for item in condensed.original_items])
        if failed_id is not None:
            return {
                "success": False,
                "error": f"Failed to update item {failed_id}",
                "failed_item_id": failed_id,
            }

        logger.info(
            f"[TOGGLE] {condensed.id}: {len(condensed.original_items)} items checked={new_state}"
        )
        return {"success": True, "checked": new_state}

    def delete_condensed_item(self, list_id: str, condensed: CondensedIngredient) -> Dict[str, Any]:
        """Delete every item behind a condensed entry; deleted items are restored on failure."""
        def make_step(item: GroceryItem) -> _Step:
            saved: Dict[str, Any] = {}

            def apply() -> bool:
                saved["item"] = self.store.get_item(list_id, item.id) or item
                saved["position"] = self.store.item_position(list_id, item.id)
                return self.store.delete_item(list_id, item.id)

            # Reverts run newest first, so each saved position is valid again
            def revert() -> bool:
                return self.store.restore_item(list_id, saved["item"], saved["position"])

            return _Step(item_id=item.id, apply=apply, revert=revert)

        failed_id = self._run_steps("DELETE", [make_step(item) for item in condensed.original_items])
        if failed_id is not None:
            return {
                "success": False,
                "error": f"Failed to delete item {failed_id}",
                "failed_item_id": failed_id,
            }

        logger.info(f"[DELETE] {condensed.id}: removed {len(condensed.original_items)} items")
        return {"success": True, "deleted": condensed.item_ids}

    def _edit_changes(self, item: GroceryItem, edit: Dict[str, Any], bounds) -> Dict[str, Any]:
        original = item.measurement.original
        quantity_min, quantity_max = bounds if bounds else (original.quantity_min, original.quantity_max)
        unit = edit["unit"] if "unit" in edit else original.unit
        changes: Dict[str, Any] = {
            "measurement": build_measurement(quantity_min, quantity_max, unit or None),
        }

        name = (edit.get("name") or "").strip()
        if name and name != item.sort_name:
            sort_name = clean_ingredient_name(name)
            changes["sort_name"] = sort_name
            changes["name"] = name
            changes["category"] = categorize(sort_name)
        return changes

    def save_item_edits(self, list_id: str, edits: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate and save edits to several items.

        Args:
            list_id: Grocery list ID
            edits: item_id -> {"quantity": "4-5", "unit": "cups", "name": "Flour"};
                every key is optional

        Returns:
            Dict with success status. The first validation error rejects
            the whole batch before anything is written.
        """
        planned = []
        for item_id, edit in edits.items():
            item = self.store.get_item(list_id, item_id)
            if item is None:
                return {"success": False, "error": f"Item {item_id} not found"}

            bounds = None
            if "quantity" in edit:
                validation = validate_quantity(edit["quantity"])
                if not validation.is_valid:
                    logger.info(f"[EDIT] Rejected quantity for {item_id}: {validation.error}")
                    return {"success": False, "error": validation.error, "item_id": item_id}
                bounds = (validation.min, validation.max)

            planned.append((item, self._edit_changes(item, edit, bounds)))

        def make_step(item: GroceryItem, changes: Dict[str, Any]) -> _Step:
            previous = {field: getattr(item, field) for field in changes}
            return _Step(
                item_id=item.id,
                apply=lambda: self.store.update_item(list_id, item.id, changes),
                revert=lambda: self.store.update_item(list_id, item.id, previous),
            )

        failed_id = self._run_steps("EDIT", [make_step(item, changes) for item, changes in planned])
        if failed_id is not None:
            return {
                "success": False,
                "error": f"Failed to update item {failed_id}",
                "failed_item_id": failed_id,
            }

        logger.info(f"[EDIT] Saved {len(planned)} item edits on list {list_id}")
        return {"success": True, "updated": [item.id for item, _ in planned]}

    def repair_legacy_names(self, list_id: str) -> Dict[str, Any]:
        """
        Move quantities out of legacy names ("Chuck Roast - 4-5 lbs").

        Items are repaired one at a time; a failed write is reported and
        the rest are still attempted.
        """
        repaired, failed = [], []
        for item in self.store.get_items(list_id):
            if " - " not in item.sort_name:
                continue

            embedded = parse_embedded_quantity(item.sort_name)
            changes: Dict[str, Any] = {
                "sort_name": embedded.name,
                "category": categorize(embedded.name),
            }
            if embedded.has_quantity:
                changes["measurement"] = build_measurement(
                    embedded.quantity_min, embedded.quantity_max, embedded.unit
                )

            if self.store.update_item(list_id, item.id, changes):
                logger.info(f"[REPAIR] '{item.sort_name}' -> '{embedded.name}'")
                repaired.append(item.id)
            else:
                logger.error(f"[REPAIR] Failed to update item {item.id}")
                failed.append(item.id)

        return {"success": not failed, "repaired": repaired, "failed": failed}
