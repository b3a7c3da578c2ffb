"""Local calendar date helpers.

All day boundaries use the local date (date.today()), never UTC, so that
"today" for take-outs, dismissals and freshness ages all roll over together.
"""

import re
from datetime import date
from typing import Optional

from freezer_tracker.core.errors import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def today_str(today: Optional[date] = None) -> str:
    """Return today's local date as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def parse_date(value, field: str) -> str:
    """Validate a YYYY-MM-DD string (or date) and return it normalized."""
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    text = value.strip()
    message = f"{field} must be a date in YYYY-MM-DD form"
    if not DATE_PATTERN.match(text):
        raise ValidationError(message)
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError:
        raise ValidationError(message)


def days_since(date_str: str, today: Optional[date] = None) -> int:
    """Whole local calendar days between date_str and today."""
    reference = today or date.today()
    return (reference - date.fromisoformat(date_str[:10])).days
