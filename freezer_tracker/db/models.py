"""Dataclass models for all database entities.

Each class maps 1:1 to a database table. Fields use Optional types for
nullable columns. These are plain data containers with no business logic.
Dates are stored as ISO YYYY-MM-DD strings.
"""

from dataclasses import dataclass
from typing import Optional

RAW_FOOD_SUB_CATEGORIES = (
    "Poultry",
    "Red Meat",
    "Fish/Seafood",
    "Ground Meat",
    "Vegetables",
    "Fruits",
    "Other",
)

MEASURING_UNITS = ("kg", "pieces")


@dataclass
class RawFoodItem:
    """Raw ingredients frozen by weight (kg) or count (pieces).

    A partial take-out splits one row into a reduced active row and a new
    consumed row with the same descriptive fields.
    """

    id: Optional[int]
    sub_category: str
    name: str
    amount: float
    measuring_unit: str  # kg, pieces
    date_added: str
    comment: Optional[str] = None
    date_removed: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class PreparedMealItem:
    """One bag of a cooked meal. Bags packed together are separate rows."""

    id: Optional[int]
    name: str
    portions: int
    date_added: str
    comment: Optional[str] = None
    date_removed: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class BreastMilkItem:
    """One bag of expressed milk."""

    id: Optional[int]
    date_expressed: str
    volume_ml: int
    date_added: str
    comment: Optional[str] = None
    date_removed: Optional[str] = None
    created_at: Optional[str] = None


@dataclass
class FreshnessSetting:
    """Day thresholds for one category (and raw-food sub-category).

    sub_category is None for prepared_meals and breast_milk.
    """

    id: Optional[int]
    category: str
    sub_category: Optional[str]
    fresh_days: int
    good_days: int
    use_soon_days: int
