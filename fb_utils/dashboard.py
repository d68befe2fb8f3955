# fb_utils/dashboard.py
"""
At-a-glance inventory summary: totals, expiry buckets, recent consumption
and the items to use up first.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, List, Optional

from fb_core.models import ConsumedItem, FoodItem
from fb_utils.expiry import (
    CRITICAL_DAYS,
    WARNING_DAYS,
    calculate_days_remaining,
    sort_items_by_expiry,
)

log = logging.getLogger("fb_utils")

TOP_EXPIRING = 5
CONSUMED_WINDOW = timedelta(days=7)


@dataclass
class DashboardSummary:
    total_items: int = 0
    expiring_critical: int = 0  # 0..critical_days left
    expiring_warning: int = 0  # critical_days+1..warning_days left
    expired: int = 0
    consumed_this_week: int = 0
    expiring_soon: List[FoodItem] = field(default_factory=list)


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        ts = datetime.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def count_consumed_since(
    consumed: Iterable[ConsumedItem], since: datetime
) -> int:
    n = 0
    for c in consumed:
        ts = _parse_timestamp(c.consumed_date)
        if ts is None:
            log.warning("Skipping consumed entry %s with bad date %r", c.id, c.consumed_date)
            continue
        if ts >= since:
            n += 1
    return n


def summarize(
    items: Iterable[FoodItem],
    consumed: Iterable[ConsumedItem] = (),
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    critical_days: int = CRITICAL_DAYS,
    warning_days: int = WARNING_DAYS,
) -> DashboardSummary:
    items = list(items)
    today = today or date.today()
    now = now or datetime.now(timezone.utc)

    summary = DashboardSummary(total_items=len(items))
    for item in items:
        try:
            days = calculate_days_remaining(item.expiry_date, today)
        except ValueError:
            log.warning("Skipping item %s with bad expiry %r", item.id, item.expiry_date)
            continue
        if days < 0:
            summary.expired += 1
        elif days <= critical_days:
            summary.expiring_critical += 1
        elif days <= warning_days:
            summary.expiring_warning += 1
        if 0 <= days <= warning_days:
            summary.expiring_soon.append(item)

    summary.expiring_soon = sort_items_by_expiry(summary.expiring_soon, today)[
        :TOP_EXPIRING
    ]
    summary.consumed_this_week = count_consumed_since(consumed, now - CONSUMED_WINDOW)
    return summary
