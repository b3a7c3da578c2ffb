"""Prepared meal inventory.

Each row is one bag. Packing several identical bags at once creates that
many independent rows, so each bag can be taken out on its own.
"""

import logging
from datetime import date
from typing import Optional

from freezer_tracker.core import lifecycle
from freezer_tracker.core.dates import parse_date
from freezer_tracker.core.errors import ValidationError
from freezer_tracker.core.lifecycle import ItemKind, clean_positive, clean_text
from freezer_tracker.db.database import get_connection
from freezer_tracker.db.models import PreparedMealItem

logger = logging.getLogger(__name__)

MAX_BAGS = 100

KIND = ItemKind(
    name="prepared_meals",
    table="prepared_meals",
    model=PreparedMealItem,
    payload_fields=("name", "portions"),
    quantity_field="portions",
    label="Prepared meal",
)

_CLEANERS = {
    "name": lambda v: clean_text(v, "name"),
    "portions": lambda v: clean_positive(v, "portions", integer=True),
    "date_added": lambda v: parse_date(v, "date_added"),
    "comment": lambda v: clean_text(v, "comment", required=False),
}


def list_active() -> list[PreparedMealItem]:
    return lifecycle.list_active(KIND)


def list_consumed() -> list[PreparedMealItem]:
    return lifecycle.list_consumed(KIND)


def get(item_id: int) -> Optional[PreparedMealItem]:
    return lifecycle.get(KIND, item_id)


def get_names() -> list[str]:
    """Return every distinct meal name, for autocomplete."""
    conn = get_connection()
    try:
        rows = conn.execute("SELECT DISTINCT name FROM prepared_meals ORDER BY name").fetchall()
        return [r["name"] for r in rows]
    finally:
        conn.close()


def create(fields: dict, quantity=1) -> list[PreparedMealItem]:
    """Insert `quantity` identical bags in one transaction and return them all."""
    quantity = clean_positive(1 if quantity is None else quantity, "quantity", integer=True)
    if quantity > MAX_BAGS:
        raise ValidationError(f"quantity must be at most {MAX_BAGS}")
    values = {column: clean(fields.get(column)) for column, clean in _CLEANERS.items()}
    conn = get_connection()
    try:
        with conn:
            ids = [lifecycle.insert(conn, KIND, values) for _ in range(quantity)]
    finally:
        conn.close()
    logger.info("Added %d bag(s) of %s", quantity, values["name"])
    return [lifecycle.get(KIND, item_id) for item_id in ids]


def update(item_id: int, fields: dict) -> PreparedMealItem:
    changes = {
        column: clean(fields[column])
        for column, clean in _CLEANERS.items()
        if fields.get(column) is not None
    }
    return lifecycle.update(KIND, item_id, changes)


def take_out(item_id: int, today: Optional[date] = None) -> None:
    """Take a whole bag out. Bags cannot be partially consumed."""
    lifecycle.take_out(KIND, item_id, today)


def put_back(item_id: int) -> None:
    lifecycle.put_back(KIND, item_id)


def delete(item_id: int) -> None:
    lifecycle.delete(KIND, item_id)
