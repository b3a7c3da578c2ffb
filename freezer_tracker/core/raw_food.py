"""Raw food inventory: validation, create/edit, and split-aware take-out.

Raw food is measured in kg or pieces. Taking out less than the full amount
splits the row: the original keeps the remainder and a new consumed row
records what was taken. The two rows are independent afterwards.
"""

import logging
from datetime import date
from typing import Optional

from freezer_tracker.core import lifecycle
from freezer_tracker.core.dates import parse_date, today_str
from freezer_tracker.core.errors import AlreadyRemovedError, NotFoundError, ValidationError
from freezer_tracker.core.lifecycle import ItemKind, clean_positive, clean_text
from freezer_tracker.db.database import get_connection
from freezer_tracker.db.models import MEASURING_UNITS, RAW_FOOD_SUB_CATEGORIES, RawFoodItem

logger = logging.getLogger(__name__)

KIND = ItemKind(
    name="raw_food",
    table="raw_food",
    model=RawFoodItem,
    payload_fields=("sub_category", "name", "amount", "measuring_unit"),
    quantity_field="amount",
    label="Raw food item",
)


def _clean_sub_category(value) -> str:
    value = clean_text(value, "sub_category")
    if value not in RAW_FOOD_SUB_CATEGORIES:
        raise ValidationError(f"sub_category must be one of: {', '.join(RAW_FOOD_SUB_CATEGORIES)}")
    return value


def _clean_unit(value) -> str:
    value = clean_text(value, "measuring_unit")
    if value not in MEASURING_UNITS:
        raise ValidationError("measuring_unit must be 'kg' or 'pieces'")
    return value


_CLEANERS = {
    "sub_category": _clean_sub_category,
    "name": lambda v: clean_text(v, "name"),
    "amount": lambda v: clean_positive(v, "amount"),
    "measuring_unit": _clean_unit,
    "date_added": lambda v: parse_date(v, "date_added"),
    "comment": lambda v: clean_text(v, "comment", required=False),
}


def list_active() -> list[RawFoodItem]:
    return lifecycle.list_active(KIND)


def list_consumed() -> list[RawFoodItem]:
    return lifecycle.list_consumed(KIND)


def get(item_id: int) -> Optional[RawFoodItem]:
    return lifecycle.get(KIND, item_id)


def get_names(sub_category: str) -> list[str]:
    """Return distinct names used for a sub-category, for autocomplete."""
    conn = get_connection()
    try:
        rows = conn.execute(
            "SELECT DISTINCT name FROM raw_food WHERE sub_category = ? ORDER BY name",
            (sub_category,),
        ).fetchall()
        return [r["name"] for r in rows]
    finally:
        conn.close()


def create(fields: dict) -> RawFoodItem:
    """Validate and insert a raw food item."""
    values = {column: clean(fields.get(column)) for column, clean in _CLEANERS.items()}
    return lifecycle.create(KIND, values)


def update(item_id: int, fields: dict) -> RawFoodItem:
    """Apply the provided fields to an existing item. None means 'keep as is'."""
    changes = {
        column: clean(fields[column])
        for column, clean in _CLEANERS.items()
        if fields.get(column) is not None
    }
    return lifecycle.update(KIND, item_id, changes)


def take_out(item_id: int, amount_taken, today: Optional[date] = None) -> int:
    """Take amount_taken out of an active item. Returns the ID of the consumed row.

    Taking the whole amount (or more, or so much that the remainder rounds
    to zero) consumes the row itself. Taking less decrements the row and inserts a consumed clone holding amount_taken;
    both statements run in one transaction.
    """
    amount_taken = clean_positive(amount_taken, "amount_taken")
    removed_on = today_str(today)
    conn = get_connection()
    try:
        with conn:
            row = conn.execute("SELECT * FROM raw_food WHERE id = ?", (item_id,)).fetchone()
            if row is None:
                raise NotFoundError(f"{KIND.label} {item_id} not found")
            if row["date_removed"] is not None:
                raise AlreadyRemovedError(f"{KIND.label} {item_id} is already removed")

            remaining = round(row["amount"] - amount_taken, 6)
            if remaining <= 0:
                conn.execute(
                    "UPDATE raw_food SET date_removed = ? WHERE id = ?",
                    (removed_on, item_id),
                )
                consumed_id = item_id
            else:
                conn.execute(
                    "UPDATE raw_food SET amount = ? WHERE id = ?",
                    (remaining, item_id),
                )
                consumed_id = lifecycle.insert(conn, KIND, {
                    "sub_category": row["sub_category"],
                    "name": row["name"],
                    "amount": amount_taken,
                    "measuring_unit": row["measuring_unit"],
                    "date_added": row["date_added"],
                    "comment": row["comment"],
                    "date_removed": removed_on,
                })
    finally:
        conn.close()

    if consumed_id == item_id:
        logger.info("Took out all of raw_food %d", item_id)
    else:
        logger.info("Split raw_food %d: %s taken into row %d", item_id, amount_taken, consumed_id)
    return consumed_id


def put_back(item_id: int) -> None:
    lifecycle.put_back(KIND, item_id)


def delete(item_id: int) -> None:
    lifecycle.delete(KIND, item_id)
