"""Combined view of everything currently in the freezer.

Merges the active items of all three kinds, attaches a freshness
classification to each, and supports the filters used by the main screen.
Also provides the red-zone list: items whose status is "red", hidden
entirely while today's alert is dismissed.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from freezer_tracker.core import breast_milk, dismissals, freshness, prepared_meals, raw_food
from freezer_tracker.core.errors import ValidationError
from freezer_tracker.core.freshness import Classification
from freezer_tracker.db.models import FreshnessSetting

# Short category names used by the API, mapped to the store modules.
CATEGORIES = {
    "raw": raw_food,
    "prepared": prepared_meals,
    "milk": breast_milk,
}
SORT_ORDERS = ("newest", "oldest")


@dataclass
class FreezerEntry:
    category: str
    item: Any
    freshness: Classification

    @property
    def date_added(self) -> str:
        return self.item.date_added


def _search_text(item) -> str:
    parts = [
        getattr(item, "name", None),
        getattr(item, "sub_category", None),
        item.comment,
    ]
    return " ".join(p for p in parts if p).lower()


def classify_items(
    category: str,
    items: list,
    settings: Optional[list[FreshnessSetting]] = None,
    today: Optional[date] = None,
) -> list[FreezerEntry]:
    """Attach a freshness classification to each item of one category."""
    if settings is None:
        settings = freshness.get_all_settings()
    kind = CATEGORIES[category].KIND
    return [
        FreezerEntry(
            category=category,
            item=item,
            freshness=freshness.assess(
                kind.name, getattr(item, "sub_category", None), item.date_added, settings, today
            ),
        )
        for item in items
    ]


def list_inventory(
    category: str = "all",
    search: str = "",
    status: str = "all",
    sort: str = "newest",
    today: Optional[date] = None,
) -> list[FreezerEntry]:
    """Return active items across kinds, filtered and sorted by date_added."""
    if category != "all" and category not in CATEGORIES:
        raise ValidationError(f"category must be 'all' or one of: {', '.join(CATEGORIES)}")
    if status != "all" and status not in freshness.STATUSES:
        raise ValidationError(f"freshness must be 'all' or one of: {', '.join(freshness.STATUSES)}")
    if sort not in SORT_ORDERS:
        raise ValidationError("sort must be 'newest' or 'oldest'")

    settings = freshness.get_all_settings()
    entries = []
    for name, module in CATEGORIES.items():
        if category in ("all", name):
            entries.extend(classify_items(name, module.list_active(), settings, today))

    needle = (search or "").strip().lower()
    if needle:
        entries = [e for e in entries if needle in _search_text(e.item)]
    if status != "all":
        entries = [e for e in entries if e.freshness.status == status]

    entries.sort(key=lambda e: e.date_added, reverse=(sort == "newest"))
    return entries


def red_zone(today: Optional[date] = None) -> list[FreezerEntry]:
    """Items that should be used immediately, or [] while dismissed for today."""
    if dismissals.is_dismissed_today(today):
        return []
    return list_inventory(status="red", sort="oldest", today=today)
