# fb_utils/inventory.py
from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from fb_core.models import FoodItem
from fb_utils.expiry import (
    CRITICAL_DAYS,
    WARNING_DAYS,
    get_expiry_status,
    sort_items_by_expiry,
)

SORT_KEYS = ("expiry", "date", "name", "category")


def filter_items(
    items: Iterable[FoodItem],
    search: Optional[str] = None,
    category: Optional[str] = None,
    storage: Optional[str] = None,
    expiry: Optional[str] = None,
    today: Optional[date] = None,
    critical_days: int = CRITICAL_DAYS,
    warning_days: int = WARNING_DAYS,
) -> List[FoodItem]:
    """
    Filter inventory items. `expiry` is "expiring" (critical or warning)
    or "safe"; None/"all" disables a filter. Status uses the given thresholds.
    """
    out = list(items)
    if search:
        needle = search.lower()
        out = [
            i
            for i in out
            if needle in i.name.lower() or needle in (i.notes or "").lower()
        ]
    if category and category != "all":
        out = [i for i in out if i.category == category]
    if storage and storage != "all":
        out = [i for i in out if i.storage == storage]
    if expiry and expiry != "all":

        def status(i: FoodItem) -> str:
            return get_expiry_status(
                i.expiry_date,
                today,
                critical_days=critical_days,
                warning_days=warning_days,
            )

        if expiry == "expiring":
            out = [i for i in out if status(i) in ("critical", "warning")]
        else:
            out = [i for i in out if status(i) == "safe"]
    return out


def sort_items(
    items: Iterable[FoodItem], by: str = "expiry", today: Optional[date] = None
) -> List[FoodItem]:
    if by == "expiry":
        return sort_items_by_expiry(items, today)
    if by == "date":
        # Newest first
        return sorted(items, key=lambda i: i.date_added, reverse=True)
    if by == "name":
        return sorted(items, key=lambda i: i.name.lower())
    if by == "category":
        return sorted(items, key=lambda i: i.category.lower())
    raise ValueError(f"Unknown sort key {by!r}; expected one of {', '.join(SORT_KEYS)}")
