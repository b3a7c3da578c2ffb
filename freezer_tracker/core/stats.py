"""Aggregate statistics over the freezer, computed live on every call.

Raw food sums are always kept per measuring unit: kilograms and pieces are
never added together.
"""

from dataclasses import dataclass

from freezer_tracker.db.database import get_connection


@dataclass
class RawFoodStats:
    in_freezer_kg: float = 0.0
    in_freezer_pieces: float = 0.0
    consumed_kg: float = 0.0
    consumed_pieces: float = 0.0
    in_freezer_count: int = 0
    consumed_count: int = 0


@dataclass
class PreparedMealStats:
    bags_in_freezer: int = 0
    portions_in_freezer: int = 0
    bags_consumed: int = 0
    portions_consumed: int = 0


@dataclass
class BreastMilkStats:
    in_freezer_ml: int = 0
    consumed_ml: int = 0
    bags_in_freezer: int = 0
    bags_consumed: int = 0


@dataclass
class FreezerStats:
    raw_food: RawFoodStats
    prepared_meals: PreparedMealStats
    breast_milk: BreastMilkStats


def _totals(conn, table: str, quantity: str, group_by: str = None) -> dict:
    """Return {(active, group): (row_count, quantity_sum)} for one table."""
    if group_by:
        select_group, group_clause = f"{group_by} AS grp", "active, grp"
    else:
        select_group, group_clause = "NULL AS grp", "active"
    rows = conn.execute(
        f"""SELECT date_removed IS NULL AS active, {select_group},
                   COUNT(*) AS n, COALESCE(SUM({quantity}), 0) AS total
            FROM {table}
            GROUP BY {group_clause}"""
    ).fetchall()
    return {(bool(r["active"]), r["grp"]): (r["n"], r["total"]) for r in rows}


def compute() -> FreezerStats:
    """Compute in-freezer and consumed totals for every item kind."""
    conn = get_connection()
    try:
        raw = _totals(conn, "raw_food", "amount", group_by="measuring_unit")
        meals = _totals(conn, "prepared_meals", "portions")
        milk = _totals(conn, "breast_milk", "volume_ml")
    finally:
        conn.close()

    def get(totals, active, group=None):
        return totals.get((active, group), (0, 0))

    raw_food = RawFoodStats(
        in_freezer_kg=float(get(raw, True, "kg")[1]),
        in_freezer_pieces=float(get(raw, True, "pieces")[1]),
        consumed_kg=float(get(raw, False, "kg")[1]),
        consumed_pieces=float(get(raw, False, "pieces")[1]),
        in_freezer_count=get(raw, True, "kg")[0] + get(raw, True, "pieces")[0],
        consumed_count=get(raw, False, "kg")[0] + get(raw, False, "pieces")[0],
    )
    prepared_meals = PreparedMealStats(
        bags_in_freezer=get(meals, True)[0],
        portions_in_freezer=int(get(meals, True)[1]),
        bags_consumed=get(meals, False)[0],
        portions_consumed=int(get(meals, False)[1]),
    )
    breast_milk = BreastMilkStats(
        in_freezer_ml=int(get(milk, True)[1]),
        consumed_ml=int(get(milk, False)[1]),
        bags_in_freezer=get(milk, True)[0],
        bags_consumed=get(milk, False)[0],
    )
    return FreezerStats(raw_food=raw_food, prepared_meals=prepared_meals, breast_milk=breast_milk)
