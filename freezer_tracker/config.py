"""Key-value preference storage backed by the SQLite settings table.

Holds presentation preferences such as the list view mode. Values are
opaque strings; nothing in freezer_tracker.core reads them.

Known keys:
    view_mode   : grid, rows or list.
    sort_order  : newest or oldest.
"""

import re
from typing import Optional

from freezer_tracker.core.errors import ValidationError
from freezer_tracker.db.database import get_connection

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


def get_setting(key: str, default: str = None) -> Optional[str]:
    """Return the value for a settings key, or default if not found."""
    conn = get_connection()
    try:
        row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else default
    finally:
        conn.close()


def get_all() -> dict[str, str]:
    """Return every stored preference as a dict."""
    conn = get_connection()
    try:
        rows = conn.execute("SELECT key, value FROM settings ORDER BY key").fetchall()
        return {row["key"]: row["value"] for row in rows}
    finally:
        conn.close()


def set_setting(key: str, value: str) -> None:
    """Insert or update a settings key-value pair (upsert)."""
    if not _KEY_PATTERN.match(key or ""):
        raise ValidationError("Preference keys may only contain letters, digits, '_', '.' and '-'")
    conn = get_connection()
    try:
        conn.execute(
            "INSERT INTO settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        conn.commit()
    finally:
        conn.close()
