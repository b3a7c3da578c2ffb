"""Red-zone dismissal: hides the "use now" alert for the rest of the local day.

One row per dismissed date. The lookup key is today's date, so a dismissal
lapses on its own at the next local midnight.
"""

import logging
from datetime import date
from typing import Optional

from freezer_tracker.core.dates import today_str
from freezer_tracker.db.database import get_connection

logger = logging.getLogger(__name__)


def is_dismissed_today(today: Optional[date] = None) -> bool:
    """Return True if the red-zone alert was dismissed on the current local date."""
    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT id FROM red_zone_dismissals WHERE dismissed_date = ?",
            (today_str(today),),
        ).fetchone()
        return row is not None
    finally:
        conn.close()


def dismiss_today(today: Optional[date] = None) -> None:
    """Record a dismissal for today. Calling it again the same day is a no-op."""
    conn = get_connection()
    try:
        cursor = conn.execute(
            "INSERT OR IGNORE INTO red_zone_dismissals (dismissed_date) VALUES (?)",
            (today_str(today),),
        )
        conn.commit()
        if cursor.rowcount:
            logger.info("Red zone dismissed for %s", today_str(today))
    finally:
        conn.close()
