from datetime import date, datetime

import pytest

from fb_core.models import FoodItem
from fb_utils.expiry import (
    calculate_days_remaining,
    format_expiry_message,
    get_expiry_status,
    sort_items_by_expiry,
)

TODAY = date(2025, 1, 10)


def test_days_remaining():
    assert calculate_days_remaining("2025-01-13", TODAY) == 3
    assert calculate_days_remaining("2025-01-10", TODAY) == 0
    assert calculate_days_remaining("2025-01-08", TODAY) == -2
    assert calculate_days_remaining(date(2025, 1, 11), TODAY) == 1
    assert calculate_days_remaining(datetime(2025, 1, 11, 23, 59), TODAY) == 1


def test_iso_timestamp_accepted():
    assert calculate_days_remaining("2025-01-12T00:00:00.000Z", TODAY) == 2


@pytest.mark.parametrize(
    "expiry,status",
    [
        ("2025-01-05", "critical"),
        ("2025-01-13", "critical"),
        ("2025-01-14", "warning"),
        ("2025-01-17", "warning"),
        ("2025-01-18", "safe"),
    ],
)
def test_status(expiry, status):
    assert get_expiry_status(expiry, TODAY) == status


def test_status_thresholds_configurable():
    assert get_expiry_status("2025-01-14", TODAY, critical_days=5) == "critical"


@pytest.mark.parametrize(
    "days,msg",
    [(-1, "Expired"), (0, "Expires today"), (1, "1 day left"), (5, "5 days left")],
)
def test_messages(days, msg):
    assert format_expiry_message(days) == msg


def test_sort_by_expiry():
    def item(i, exp):
        return FoodItem(i, i, "Others", "", exp, "Pantry", "2025-01-01")

    items = [item("c", "2025-02-01"), item("a", "2025-01-09"), item("b", "2025-01-15")]
    assert [i.id for i in sort_items_by_expiry(items, TODAY)] == ["a", "b", "c"]
    assert [i.id for i in items] == ["c", "a", "b"]
