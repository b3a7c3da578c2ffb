from freezer_tracker.core import breast_milk, prepared_meals, raw_food, stats


def _raw(name, amount, unit):
    return raw_food.create({
        "sub_category": "Other", "name": name, "amount": amount,
        "measuring_unit": unit, "date_added": "2024-05-01",
    })


def test_empty_freezer_stats(authed_client):
    body = authed_client.get("/stats").json()
    assert body["raw_food"]["in_freezer_kg"] == 0
    assert body["prepared_meals"]["bags_in_freezer"] == 0
    assert body["breast_milk"]["consumed_ml"] == 0


def test_kg_and_pieces_are_never_mixed():
    _raw("Mince", 1.5, "kg")
    _raw("Peas", 0.5, "kg")
    burgers = _raw("Burgers", 4, "pieces")
    raw_food.take_out(burgers.id, 1)

    result = stats.compute().raw_food
    assert result.in_freezer_kg == 2.0
    assert result.in_freezer_pieces == 3
    assert result.consumed_pieces == 1
    assert result.consumed_kg == 0
    assert result.in_freezer_count == 3
    assert result.consumed_count == 1

    expected_kg = sum(i.amount for i in raw_food.list_active() if i.measuring_unit == "kg")
    assert result.in_freezer_kg == expected_kg


def test_split_preserves_total_quantity():
    steak = _raw("Steak", 2.0, "kg")
    raw_food.take_out(steak.id, 0.75)
    result = stats.compute().raw_food
    assert result.in_freezer_kg + result.consumed_kg == 2.0


def test_meal_and_milk_totals(authed_client):
    bags = prepared_meals.create({"name": "Lasagna", "portions": 2, "date_added": "2024-05-01"}, quantity=3)
    prepared_meals.take_out(bags[0].id)
    milk = breast_milk.create({"date_expressed": "2024-05-01", "date_added": "2024-05-01", "volume_ml": 120})
    breast_milk.create({"date_expressed": "2024-05-02", "date_added": "2024-05-02", "volume_ml": 80})
    breast_milk.take_out(milk.id)

    body = authed_client.get("/stats").json()
    assert body["prepared_meals"] == {
        "bags_in_freezer": 2,
        "portions_in_freezer": 4,
        "bags_consumed": 1,
        "portions_consumed": 2,
    }
    assert body["breast_milk"] == {
        "in_freezer_ml": 80,
        "consumed_ml": 120,
        "bags_in_freezer": 1,
        "bags_consumed": 1,
    }
