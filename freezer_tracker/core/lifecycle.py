"""Shared lifecycle operations for every freezer item kind.

All three kinds carry the same envelope (date_added, date_removed, comment,
created_at) around their own payload columns. An ItemKind describes one
table; the functions here implement listing, editing, take-out, put-back
and delete once for all of them. Kind-specific validation lives in
raw_food.py, prepared_meals.py and breast_milk.py.

An item is "active" while date_removed is NULL and "consumed" once it is set.
"""

import logging
import sqlite3
from dataclasses import dataclass
from datetime import date
from typing import Optional

from freezer_tracker.core.dates import today_str
from freezer_tracker.core.errors import AlreadyRemovedError, NotFoundError, ValidationError
from freezer_tracker.db.database import get_connection

logger = logging.getLogger(__name__)

ENVELOPE_FIELDS = ("date_added", "comment", "date_removed")


@dataclass(frozen=True)
class ItemKind:
    """Table description for one item kind.

    payload_fields are the kind's own columns; quantity_field is the one
    summed by the stats module.
    """

    name: str
    table: str
    model: type
    payload_fields: tuple
    quantity_field: str
    label: str

    @property
    def columns(self) -> tuple:
        return self.payload_fields + ENVELOPE_FIELDS


# ── Field cleaning ─────────────────────────────────────────────────────────────

def clean_text(value, field: str, required: bool = True) -> Optional[str]:
    """Trim a string field. Required fields must be non-empty after trimming."""
    if value is None:
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    value = value.strip()
    if not value:
        if required:
            raise ValidationError(f"{field} is required")
        return None
    return value


def clean_positive(value, field: str, integer: bool = False):
    """Return value as a positive int or float, raising ValidationError otherwise."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if number <= 0:
        raise ValidationError(f"{field} must be greater than zero")
    if integer:
        if number != int(number):
            raise ValidationError(f"{field} must be a whole number")
        return int(number)
    return number


# ── Reads ──────────────────────────────────────────────────────────────────────

def _to_item(kind: ItemKind, row: sqlite3.Row):
    return kind.model(**dict(row))


def list_active(kind: ItemKind) -> list:
    """Return items still in the freezer, newest date_added first."""
    conn = get_connection()
    try:
        rows = conn.execute(
            f"SELECT * FROM {kind.table} WHERE date_removed IS NULL "
            "ORDER BY date_added DESC, id DESC"
        ).fetchall()
        return [_to_item(kind, row) for row in rows]
    finally:
        conn.close()


def list_consumed(kind: ItemKind) -> list:
    """Return consumed items, most recently removed first."""
    conn = get_connection()
    try:
        rows = conn.execute(
            f"SELECT * FROM {kind.table} WHERE date_removed IS NOT NULL "
            "ORDER BY date_removed DESC, id DESC"
        ).fetchall()
        return [_to_item(kind, row) for row in rows]
    finally:
        conn.close()


def get(kind: ItemKind, item_id: int):
    """Return a single item by ID, or None if not found."""
    conn = get_connection()
    try:
        row = conn.execute(f"SELECT * FROM {kind.table} WHERE id = ?", (item_id,)).fetchone()
        return _to_item(kind, row) if row else None
    finally:
        conn.close()


def require(kind: ItemKind, item_id: int):
    """Like get(), but raises NotFoundError for a missing ID."""
    item = get(kind, item_id)
    if item is None:
        raise NotFoundError(f"{kind.label} {item_id} not found")
    return item


# ── Writes ─────────────────────────────────────────────────────────────────────

def insert(conn: sqlite3.Connection, kind: ItemKind, values: dict) -> int:
    """Insert one row on an open connection and return its ID. Does not commit."""
    columns = [c for c in kind.columns if c in values]
    placeholders = ", ".join("?" for _ in columns)
    cursor = conn.execute(
        f"INSERT INTO {kind.table} ({', '.join(columns)}) VALUES ({placeholders})",
        [values[c] for c in columns],
    )
    return cursor.lastrowid


def create(kind: ItemKind, values: dict):
    """Insert one validated row and return the stored item."""
    conn = get_connection()
    try:
        with conn:
            item_id = insert(conn, kind, values)
    finally:
        conn.close()
    logger.info("Added %s %d", kind.name, item_id)
    return get(kind, item_id)


def update(kind: ItemKind, item_id: int, changes: dict):
    """Overwrite the given columns on an existing row and return the updated item."""
    require(kind, item_id)
    if changes:
        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn = get_connection()
        try:
            conn.execute(
                f"UPDATE {kind.table} SET {assignments} WHERE id = ?",
                [*changes.values(), item_id],
            )
            conn.commit()
        finally:
            conn.close()
    return get(kind, item_id)


def take_out(kind: ItemKind, item_id: int, today: Optional[date] = None) -> None:
    """Mark a whole active item as consumed today.

    Raises NotFoundError if the item does not exist and AlreadyRemovedError
    if it is already consumed.
    """
    conn = get_connection()
    try:
        cursor = conn.execute(
            f"UPDATE {kind.table} SET date_removed = ? WHERE id = ? AND date_removed IS NULL",
            (today_str(today), item_id),
        )
        conn.commit()
        changed = cursor.rowcount
    finally:
        conn.close()
    if changed == 0:
        if get(kind, item_id) is None:
            raise NotFoundError(f"{kind.label} {item_id} not found")
        raise AlreadyRemovedError(f"{kind.label} {item_id} is already removed")
    logger.info("Took out %s %d", kind.name, item_id)


def put_back(kind: ItemKind, item_id: int) -> None:
    """Return a consumed item to the freezer by clearing date_removed.

    Split rows stay separate; nothing is merged back.
    """
    conn = get_connection()
    try:
        cursor = conn.execute(
            f"UPDATE {kind.table} SET date_removed = NULL WHERE id = ? AND date_removed IS NOT NULL",
            (item_id,),
        )
        conn.commit()
        changed = cursor.rowcount
    finally:
        conn.close()
    if changed == 0:
        raise NotFoundError(f"{kind.label} {item_id} not found or not removed")
    logger.info("Put back %s %d", kind.name, item_id)


def delete(kind: ItemKind, item_id: int) -> None:
    """Permanently delete an item by ID."""
    conn = get_connection()
    try:
        cursor = conn.execute(f"DELETE FROM {kind.table} WHERE id = ?", (item_id,))
        conn.commit()
        deleted = cursor.rowcount
    finally:
        conn.close()
    if deleted == 0:
        raise NotFoundError(f"{kind.label} {item_id} not found")
    logger.info("Deleted %s %d", kind.name, item_id)
