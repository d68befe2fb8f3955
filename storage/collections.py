# storage/collections.py
"""
JSON collections kept under fixed keys of a KeyValueStore:
food items, consumed items, the shopping list and user preferences.

Each collection is read and replaced as a whole value.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, TypeVar

from fb_core.models import (
    ConsumedItem,
    FoodItem,
    ShoppingListItem,
    UserPreferences,
    generate_id,
)
from .base import KeyValueStore

log = logging.getLogger("storage")

T = TypeVar("T")

STORAGE_KEYS = {
    "items": "freshbite_items",
    "consumed": "freshbite_consumed",
    "shopping": "freshbite_shopping",
    "preferences": "freshbite_preferences",
}


def read_json(store: KeyValueStore, key: str, expected: type, default: Any) -> Any:
    """
    Read and decode one JSON blob. Unreadable store, invalid JSON or an
    unexpected top-level type all yield `default` (logged, never raised).
    """
    try:
        raw = store.get(key)
    except Exception as exc:  # guardrail: backends raise their own error types
        log.warning("Could not read %s: %s", key, exc)
        return default
    if raw is None:
        return default
    try:
        data = json.loads(raw)
    except ValueError as exc:
        log.warning("Malformed JSON under %s: %s", key, exc)
        return default
    if not isinstance(data, expected):
        log.warning(
            "Expected %s under %s, got %s", expected.__name__, key, type(data).__name__
        )
        return default
    return data


def write_json(store: KeyValueStore, key: str, data: Any) -> None:
    store.set(key, json.dumps(data, ensure_ascii=False))


def _records(
    store: KeyValueStore, key: str, factory: Callable[[dict], T]
) -> List[T]:
    out: List[T] = []
    for entry in read_json(store, key, list, []):
        try:
            out.append(factory(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            log.warning("Skipping bad record under %s: %s", key, exc)
    return out


class FoodRepository:
    """CRUD over the persisted food-inventory collections."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    # ---------- food items ----------
    def get_items(self) -> List[FoodItem]:
        return _records(self.store, STORAGE_KEYS["items"], FoodItem.from_dict)

    def set_items(self, items: List[FoodItem]) -> None:
        write_json(self.store, STORAGE_KEYS["items"], [i.to_dict() for i in items])

    def add_item(self, item: FoodItem) -> None:
        items = self.get_items()
        items.append(item)
        self.set_items(items)

    def get_item(self, item_id: str) -> Optional[FoodItem]:
        return next((i for i in self.get_items() if i.id == item_id), None)

    def update_item(self, item_id: str, **updates: Any) -> bool:
        """Apply field updates to one item. Returns False if the id is unknown."""
        items = self.get_items()
        for item in items:
            if item.id == item_id:
                for k, v in updates.items():
                    if not hasattr(item, k):
                        raise AttributeError(f"FoodItem has no field {k!r}")
                    setattr(item, k, v)
                self.set_items(items)
                return True
        return False

    def delete_item(self, item_id: str) -> bool:
        items = self.get_items()
        kept = [i for i in items if i.id != item_id]
        self.set_items(kept)
        return len(kept) != len(items)

    def mark_consumed(
        self, item_id: str, method: str = "manual", restock: bool = True
    ) -> Optional[ConsumedItem]:
        """
        Move an item from the inventory to the consumed log.
        With restock, the item is also queued on the shopping list (source "auto").
        Returns None if the id is unknown.
        """
        item = self.get_item(item_id)
        if item is None:
            return None
        consumed = ConsumedItem(
            id=generate_id(),
            item_name=item.name,
            consumed_date=datetime.now(timezone.utc).isoformat(),
            method=method,
            quantity=item.quantity,
        )
        self.add_consumed_item(consumed)
        self.delete_item(item_id)
        if restock:
            self.add_to_shopping_list(
                ShoppingListItem(
                    id=generate_id(),
                    name=item.name,
                    category=item.category,
                    quantity=item.quantity,
                    source="auto",
                )
            )
        log.info("Consumed %s (%s)", item.name, method)
        return consumed

    # ---------- consumed log ----------
    def get_consumed_items(self) -> List[ConsumedItem]:
        return _records(self.store, STORAGE_KEYS["consumed"], ConsumedItem.from_dict)

    def add_consumed_item(self, item: ConsumedItem) -> None:
        consumed = self.get_consumed_items()
        consumed.append(item)
        write_json(
            self.store, STORAGE_KEYS["consumed"], [c.to_dict() for c in consumed]
        )

    # ---------- shopping list ----------
    def get_shopping_list(self) -> List[ShoppingListItem]:
        return _records(
            self.store, STORAGE_KEYS["shopping"], ShoppingListItem.from_dict
        )

    def set_shopping_list(self, items: List[ShoppingListItem]) -> None:
        write_json(self.store, STORAGE_KEYS["shopping"], [i.to_dict() for i in items])

    def add_to_shopping_list(self, item: ShoppingListItem) -> None:
        items = self.get_shopping_list()
        items.append(item)
        self.set_shopping_list(items)

    def update_shopping_item(self, item_id: str, **updates: Any) -> bool:
        items = self.get_shopping_list()
        for item in items:
            if item.id == item_id:
                for k, v in updates.items():
                    if not hasattr(item, k):
                        raise AttributeError(f"ShoppingListItem has no field {k!r}")
                    setattr(item, k, v)
                self.set_shopping_list(items)
                return True
        return False

    def delete_shopping_item(self, item_id: str) -> bool:
        items = self.get_shopping_list()
        kept = [i for i in items if i.id != item_id]
        self.set_shopping_list(kept)
        return len(kept) != len(items)

    def clear_completed_shopping_items(self) -> int:
        """Drop completed entries; returns how many were removed."""
        items = self.get_shopping_list()
        kept = [i for i in items if not i.is_completed]
        self.set_shopping_list(kept)
        return len(items) - len(kept)

    # ---------- user preferences ----------
    def get_preferences(self) -> Optional[UserPreferences]:
        data = read_json(self.store, STORAGE_KEYS["preferences"], dict, None)
        if data is None:
            return None
        try:
            return UserPreferences.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Ignoring bad preferences record: %s", exc)
            return None

    def set_preferences(self, prefs: UserPreferences) -> None:
        write_json(self.store, STORAGE_KEYS["preferences"], prefs.to_dict())
