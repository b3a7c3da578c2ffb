import pytest

from freezer_tracker.core import breast_milk, inventory, prepared_meals, raw_food
from freezer_tracker.core.errors import ValidationError


@pytest.fixture
def stocked(days_ago):
    raw_food.create({
        "sub_category": "Vegetables", "name": "Green Beans", "amount": 0.8,
        "measuring_unit": "kg", "date_added": days_ago(5), "comment": "from the garden",
    })
    prepared_meals.create({"name": "Bean Chili", "portions": 2, "date_added": days_ago(75)})
    breast_milk.create({"date_expressed": days_ago(30), "date_added": days_ago(30), "volume_ml": 100})
    taken = prepared_meals.create({"name": "Soup", "portions": 1, "date_added": days_ago(1)})[0]
    prepared_meals.take_out(taken.id)


def test_lists_active_items_of_all_kinds_newest_first(authed_client, stocked):
    body = authed_client.get("/inventory").json()
    assert [e["category"] for e in body["items"]] == ["raw", "milk", "prepared"]
    assert body["warnings"] == []


def test_sort_oldest_first(authed_client, stocked):
    body = authed_client.get("/inventory?sort=oldest").json()
    assert [e["category"] for e in body["items"]] == ["prepared", "milk", "raw"]


def test_filter_by_category_and_status(authed_client, stocked):
    body = authed_client.get("/inventory?category=prepared").json()
    assert [e["item"]["name"] for e in body["items"]] == ["Bean Chili"]
    assert body["items"][0]["freshness"] == "use_soon"

    body = authed_client.get("/inventory?freshness=fresh").json()
    assert {e["category"] for e in body["items"]} == {"raw", "milk"}


def test_search_matches_name_and_comment(stocked):
    assert [e.category for e in inventory.list_inventory(search="bean")] == ["raw", "prepared"]
    assert [e.item.name for e in inventory.list_inventory(search="GARDEN")] == ["Green Beans"]


@pytest.mark.parametrize("query", ["category=fish", "freshness=stale", "sort=random"])
def test_rejects_unknown_filters(authed_client, query):
    assert authed_client.get(f"/inventory?{query}").status_code == 400


def test_invalid_filter_raises_in_core():
    with pytest.raises(ValidationError):
        inventory.list_inventory(category="everything")
