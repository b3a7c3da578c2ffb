"""Request bodies and response shaping for the JSON API.

Every field is optional so that missing or blank values reach the core
modules, which own validation and raise ValidationError (HTTP 400).
"""

from dataclasses import asdict
from typing import Optional

from pydantic import BaseModel

from freezer_tracker.core.inventory import FreezerEntry


class RawFoodFields(BaseModel):
    sub_category: Optional[str] = None
    name: Optional[str] = None
    amount: Optional[float] = None
    measuring_unit: Optional[str] = None
    date_added: Optional[str] = None
    comment: Optional[str] = None


class TakeOutRequest(BaseModel):
    amount_taken: Optional[float] = None


class PreparedMealFields(BaseModel):
    name: Optional[str] = None
    portions: Optional[int] = None
    date_added: Optional[str] = None
    comment: Optional[str] = None


class PreparedMealCreate(PreparedMealFields):
    quantity: Optional[int] = 1


class BreastMilkFields(BaseModel):
    date_expressed: Optional[str] = None
    volume_ml: Optional[int] = None
    date_added: Optional[str] = None
    comment: Optional[str] = None


class FreshnessSettingUpdate(BaseModel):
    fresh_days: Optional[int] = None
    good_days: Optional[int] = None
    use_soon_days: Optional[int] = None


class PreferenceValue(BaseModel):
    value: str


class LoginRequest(BaseModel):
    password: str = ""


SUCCESS = {"success": True}


def item_with_freshness(entry: FreezerEntry) -> dict:
    """Flatten an item and its computed status into one record."""
    return {
        **asdict(entry.item),
        "freshness": entry.freshness.status,
        "freshness_warning": entry.freshness.warning,
    }


def entry_payload(entry: FreezerEntry) -> dict:
    return {
        "category": entry.category,
        "freshness": entry.freshness.status,
        "freshness_warning": entry.freshness.warning,
        "item": asdict(entry.item),
    }


def collect_warnings(entries: list[FreezerEntry]) -> list[str]:
    return sorted({e.freshness.warning for e in entries if e.freshness.warning})
