from datetime import date, timedelta

from freezer_tracker.core import dismissals, inventory, raw_food
from freezer_tracker.db.database import get_connection


def _dismissal_rows() -> int:
    conn = get_connection()
    try:
        return conn.execute("SELECT COUNT(*) FROM red_zone_dismissals").fetchone()[0]
    finally:
        conn.close()


def test_not_dismissed_by_default(authed_client):
    assert authed_client.get("/red-zone-dismissed").json() == {"dismissed": False}


def test_dismiss_is_idempotent(authed_client):
    assert authed_client.post("/red-zone-dismiss").json() == {"success": True}
    assert authed_client.get("/red-zone-dismissed").json() == {"dismissed": True}
    assert authed_client.post("/red-zone-dismiss").json() == {"success": True}
    assert authed_client.get("/red-zone-dismissed").json() == {"dismissed": True}
    assert _dismissal_rows() == 1


def test_dismissal_expires_next_day():
    today = date(2024, 6, 15)
    dismissals.dismiss_today(today)
    assert dismissals.is_dismissed_today(today)
    assert not dismissals.is_dismissed_today(today + timedelta(days=1))


def test_red_zone_lists_only_red_items(authed_client, days_ago):
    old = raw_food.create({
        "sub_category": "Ground Meat", "name": "Mince", "amount": 1,
        "measuring_unit": "kg", "date_added": days_ago(200),
    })
    raw_food.create({
        "sub_category": "Ground Meat", "name": "Fresh Mince", "amount": 1,
        "measuring_unit": "kg", "date_added": days_ago(10),
    })
    body = authed_client.get("/red-zone").json()
    assert body["dismissed"] is False
    assert [e["item"]["id"] for e in body["items"]] == [old.id]
    assert body["items"][0]["freshness"] == "red"
    assert body["items"][0]["category"] == "raw"


def test_red_zone_is_suppressed_while_dismissed(authed_client, days_ago):
    raw_food.create({
        "sub_category": "Ground Meat", "name": "Mince", "amount": 1,
        "measuring_unit": "kg", "date_added": days_ago(200),
    })
    authed_client.post("/red-zone-dismiss")
    body = authed_client.get("/red-zone").json()
    assert body == {"dismissed": True, "items": []}

    tomorrow = date.today() + timedelta(days=1)
    assert len(inventory.red_zone(today=tomorrow)) == 1
