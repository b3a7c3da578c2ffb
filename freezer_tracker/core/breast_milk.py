"""Breast milk inventory: one row per bag, taken out whole."""

from datetime import date
from typing import Optional

from freezer_tracker.core import lifecycle
from freezer_tracker.core.dates import parse_date
from freezer_tracker.core.lifecycle import ItemKind, clean_positive, clean_text
from freezer_tracker.db.models import BreastMilkItem

KIND = ItemKind(
    name="breast_milk",
    table="breast_milk",
    model=BreastMilkItem,
    payload_fields=("date_expressed", "volume_ml"),
    quantity_field="volume_ml",
    label="Breast milk bag",
)

_CLEANERS = {
    "date_expressed": lambda v: parse_date(v, "date_expressed"),
    "volume_ml": lambda v: clean_positive(v, "volume_ml", integer=True),
    "date_added": lambda v: parse_date(v, "date_added"),
    "comment": lambda v: clean_text(v, "comment", required=False),
}


def list_active() -> list[BreastMilkItem]:
    return lifecycle.list_active(KIND)


def list_consumed() -> list[BreastMilkItem]:
    return lifecycle.list_consumed(KIND)


def get(item_id: int) -> Optional[BreastMilkItem]:
    return lifecycle.get(KIND, item_id)


def create(fields: dict) -> BreastMilkItem:
    values = {column: clean(fields.get(column)) for column, clean in _CLEANERS.items()}
    return lifecycle.create(KIND, values)


def update(item_id: int, fields: dict) -> BreastMilkItem:
    changes = {
        column: clean(fields[column])
        for column, clean in _CLEANERS.items()
        if fields.get(column) is not None
    }
    return lifecycle.update(KIND, item_id, changes)


def take_out(item_id: int, today: Optional[date] = None) -> None:
    lifecycle.take_out(KIND, item_id, today)


def put_back(item_id: int) -> None:
    lifecycle.put_back(KIND, item_id)


def delete(item_id: int) -> None:
    lifecycle.delete(KIND, item_id)
