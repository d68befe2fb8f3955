# fb_utils/expiry.py
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from fb_core.models import FoodItem

DateLike = Union[str, date, datetime]

CRITICAL_DAYS = 3
WARNING_DAYS = 7


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Accept full ISO timestamps too ("2025-01-31T00:00:00.000Z")
    return date.fromisoformat(str(value).strip()[:10])


def calculate_days_remaining(expiry: DateLike, today: Optional[date] = None) -> int:
    """Whole days from today to expiry; negative once expired."""
    today = today or date.today()
    return (_to_date(expiry) - today).days


def get_expiry_status(
    expiry: DateLike,
    today: Optional[date] = None,
    critical_days: int = CRITICAL_DAYS,
    warning_days: int = WARNING_DAYS,
) -> str:
    """critical (<= 3 days), warning (<= 7 days) or safe."""
    days = calculate_days_remaining(expiry, today)
    if days <= critical_days:
        return "critical"
    if days <= warning_days:
        return "warning"
    return "safe"


def format_expiry_message(days: int) -> str:
    if days < 0:
        return "Expired"
    if days == 0:
        return "Expires today"
    if days == 1:
        return "1 day left"
    return f"{days} days left"


def sort_items_by_expiry(
    items: Iterable[FoodItem], today: Optional[date] = None
) -> List[FoodItem]:
    """Soonest expiry first; returns a new list."""
    return sorted(
        items, key=lambda i: calculate_days_remaining(i.expiry_date, today)
    )
