"""Freshness Engine: classifies freezer items by how long they have been stored.

Each category has three ascending day thresholds (fresh_days < good_days <
use_soon_days) kept in the freshness_settings table. An item's age is the
number of local calendar days since date_added:

    age <= fresh_days      -> "fresh"
    age <= good_days       -> "good"
    age <= use_soon_days   -> "use_soon"
    otherwise              -> "red"

Status is computed on read and never stored. Raw food thresholds are looked
up by sub-category and fall back to the "Other" row; prepared meals and
breast milk have a single row each. If nothing resolves, the item is
reported as "good" together with a configuration warning.
"""

import logging
from datetime import date
from typing import NamedTuple, Optional

from freezer_tracker.core.dates import days_since
from freezer_tracker.core.errors import NotFoundError, ValidationError
from freezer_tracker.db.database import get_connection
from freezer_tracker.db.models import FreshnessSetting

logger = logging.getLogger(__name__)

STATUSES = ("fresh", "good", "use_soon", "red")
FALLBACK_STATUS = "good"
RAW_FOOD_FALLBACK_SUB_CATEGORY = "Other"


class Classification(NamedTuple):
    status: str
    warning: Optional[str] = None


def classify(date_added: str, thresholds: FreshnessSetting, today: Optional[date] = None) -> str:
    """Return the freshness status for an item added on date_added."""
    age = days_since(date_added, today)
    if age <= thresholds.fresh_days:
        return "fresh"
    if age <= thresholds.good_days:
        return "good"
    if age <= thresholds.use_soon_days:
        return "use_soon"
    return "red"


def resolve_setting(
    category: str,
    sub_category: Optional[str],
    settings: list[FreshnessSetting],
) -> Optional[FreshnessSetting]:
    """Pick the thresholds that apply to an item, or None if none are configured."""
    by_key = {(s.category, s.sub_category): s for s in settings}
    if category == "raw_food":
        return by_key.get((category, sub_category)) or by_key.get(
            (category, RAW_FOOD_FALLBACK_SUB_CATEGORY)
        )
    return by_key.get((category, None))


def assess(
    category: str,
    sub_category: Optional[str],
    date_added: str,
    settings: list[FreshnessSetting],
    today: Optional[date] = None,
) -> Classification:
    """Classify one item, degrading to FALLBACK_STATUS with a warning on misconfiguration."""
    setting = resolve_setting(category, sub_category, settings)
    if setting is None:
        label = f"{category}/{sub_category}" if sub_category else category
        warning = f"No freshness settings configured for {label}"
        logger.warning(warning)
        return Classification(FALLBACK_STATUS, warning)
    return Classification(classify(date_added, setting, today))


# ── Settings storage ───────────────────────────────────────────────────────────

def get_all_settings() -> list[FreshnessSetting]:
    """Return every freshness setting row."""
    conn = get_connection()
    try:
        rows = conn.execute("SELECT * FROM freshness_settings ORDER BY id").fetchall()
        return [FreshnessSetting(**dict(row)) for row in rows]
    finally:
        conn.close()


def get_setting(setting_id: int) -> Optional[FreshnessSetting]:
    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT * FROM freshness_settings WHERE id = ?", (setting_id,)
        ).fetchone()
        return FreshnessSetting(**dict(row)) if row else None
    finally:
        conn.close()


def _clean_days(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value):
        raise ValidationError(f"{field} must be a whole number of days")
    if value < 0:
        raise ValidationError(f"{field} cannot be negative")
    return int(value)


def update_setting(
    setting_id: int,
    fresh_days: Optional[int] = None,
    good_days: Optional[int] = None,
    use_soon_days: Optional[int] = None,
) -> FreshnessSetting:
    """Change the thresholds of one setting row. Omitted values are kept.

    The merged thresholds must be strictly ascending.
    """
    setting = get_setting(setting_id)
    if setting is None:
        raise NotFoundError(f"Freshness setting {setting_id} not found")

    if fresh_days is not None:
        setting.fresh_days = _clean_days(fresh_days, "fresh_days")
    if good_days is not None:
        setting.good_days = _clean_days(good_days, "good_days")
    if use_soon_days is not None:
        setting.use_soon_days = _clean_days(use_soon_days, "use_soon_days")
    if not setting.fresh_days < setting.good_days < setting.use_soon_days:
        raise ValidationError("Thresholds must satisfy fresh_days < good_days < use_soon_days")

    conn = get_connection()
    try:
        conn.execute(
            """UPDATE freshness_settings SET fresh_days = ?, good_days = ?, use_soon_days = ?
               WHERE id = ?""",
            (setting.fresh_days, setting.good_days, setting.use_soon_days, setting_id),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info(
        "Freshness thresholds for %s/%s set to %d/%d/%d",
        setting.category, setting.sub_category,
        setting.fresh_days, setting.good_days, setting.use_soon_days,
    )
    return setting
