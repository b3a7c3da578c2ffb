from datetime import date, timedelta

import pytest

from freezer_tracker.core import freshness
from freezer_tracker.core.errors import NotFoundError, ValidationError
from freezer_tracker.db.models import FreshnessSetting

TODAY = date(2024, 6, 15)


def _setting(category="raw_food", sub_category="Poultry", fresh=90, good=180, use_soon=270):
    return FreshnessSetting(
        id=None, category=category, sub_category=sub_category,
        fresh_days=fresh, good_days=good, use_soon_days=use_soon,
    )


def _added(days: int) -> str:
    return (TODAY - timedelta(days=days)).isoformat()


@pytest.mark.parametrize("age, expected", [
    (0, "fresh"),
    (90, "fresh"),
    (91, "good"),
    (180, "good"),
    (181, "use_soon"),
    (270, "use_soon"),
    (271, "red"),
])
def test_classify_threshold_boundaries(age, expected):
    assert freshness.classify(_added(age), _setting(), today=TODAY) == expected


def test_classify_age_sweep_is_monotonic_and_skips_nothing():
    thresholds = _setting(fresh=3, good=6, use_soon=9)
    seen = [freshness.classify(_added(age), thresholds, today=TODAY) for age in range(0, 11)]
    severity = [freshness.STATUSES.index(s) for s in seen]
    assert severity == sorted(severity)
    assert list(dict.fromkeys(seen)) == list(freshness.STATUSES)


def test_classify_uses_calendar_days_not_timestamps():
    # Added "yesterday" is one day old regardless of the time of day.
    assert freshness.classify("2024-06-14", _setting(fresh=0, good=1, use_soon=2), today=TODAY) == "good"


def test_resolve_falls_back_to_other_for_raw_food():
    other = _setting(sub_category="Other", fresh=1, good=2, use_soon=3)
    resolved = freshness.resolve_setting("raw_food", "Mystery", [_setting(), other])
    assert resolved is other


def test_resolve_category_only_for_meals_and_milk():
    meals = _setting(category="prepared_meals", sub_category=None, fresh=30, good=60, use_soon=90)
    assert freshness.resolve_setting("prepared_meals", None, [_setting(), meals]) is meals
    assert freshness.resolve_setting("breast_milk", None, [_setting(), meals]) is None


def test_assess_without_settings_is_good_with_warning():
    result = freshness.assess("breast_milk", None, _added(500), [], today=TODAY)
    assert result.status == "good"
    assert "breast_milk" in result.warning


def test_assess_with_settings_has_no_warning():
    result = freshness.assess("raw_food", "Poultry", _added(300), [_setting()], today=TODAY)
    assert result == ("red", None)


def test_poultry_scenario_through_api(authed_client, days_ago):
    for age, expected in [(20, "fresh"), (100, "good"), (200, "use_soon"), (300, "red")]:
        created = authed_client.post("/raw-food", json={
            "sub_category": "Poultry", "name": "Chicken Breast", "amount": 2.0,
            "measuring_unit": "kg", "date_added": days_ago(age),
        }).json()
        listed = {i["id"]: i for i in authed_client.get("/raw-food").json()}
        assert listed[created["id"]]["freshness"] == expected


def test_default_settings_are_seeded(authed_client):
    resp = authed_client.get("/freshness-settings")
    assert resp.status_code == 200
    settings = resp.json()
    assert len(settings) == 9
    poultry = next(s for s in settings if s["sub_category"] == "Poultry")
    assert (poultry["fresh_days"], poultry["good_days"], poultry["use_soon_days"]) == (90, 180, 270)


def test_init_db_twice_does_not_duplicate_null_sub_categories():
    from freezer_tracker.db.database import init_db
    init_db()
    init_db()
    settings = freshness.get_all_settings()
    assert len([s for s in settings if s.category == "prepared_meals"]) == 1
    assert len(settings) == 9


def test_seeding_never_overwrites_custom_thresholds():
    from freezer_tracker.db.database import init_db
    meals = next(s for s in freshness.get_all_settings() if s.category == "prepared_meals")
    freshness.update_setting(meals.id, fresh_days=5, good_days=10, use_soon_days=15)
    init_db()
    assert freshness.get_setting(meals.id).fresh_days == 5


def test_patch_setting(authed_client):
    meals = next(s for s in authed_client.get("/freshness-settings").json()
                 if s["category"] == "prepared_meals")
    resp = authed_client.patch(f"/freshness-settings/{meals['id']}", json={"use_soon_days": 120})
    assert resp.status_code == 200
    body = resp.json()
    assert body["use_soon_days"] == 120
    assert body["fresh_days"] == 30


def test_patch_setting_rejects_unordered_thresholds(authed_client):
    meals = next(s for s in authed_client.get("/freshness-settings").json()
                 if s["category"] == "prepared_meals")
    resp = authed_client.patch(f"/freshness-settings/{meals['id']}", json={"good_days": 10})
    assert resp.status_code == 400


def test_patch_missing_setting_returns_404(authed_client):
    resp = authed_client.patch("/freshness-settings/99999", json={"fresh_days": 1})
    assert resp.status_code == 404


def test_update_setting_rejects_negative_days():
    setting = freshness.get_all_settings()[0]
    with pytest.raises(ValidationError):
        freshness.update_setting(setting.id, fresh_days=-1)


def test_update_missing_setting_raises():
    with pytest.raises(NotFoundError):
        freshness.update_setting(99999, fresh_days=1)


def test_missing_settings_row_degrades_to_good(authed_client, days_ago):
    from freezer_tracker.db.database import get_connection
    conn = get_connection()
    try:
        conn.execute("DELETE FROM freshness_settings WHERE category = 'breast_milk'")
        conn.commit()
    finally:
        conn.close()
    authed_client.post("/breast-milk", json={
        "date_expressed": days_ago(400), "date_added": days_ago(400), "volume_ml": 120,
    })
    body = authed_client.get("/inventory?category=milk").json()
    assert [i["freshness"] for i in body["items"]] == ["good"]
    assert body["warnings"]
    active = authed_client.get("/breast-milk").json()
    assert active[0]["freshness"] == "good"
    assert active[0]["freshness_warning"] == body["warnings"][0]


def test_configured_items_carry_no_warning(authed_client, chicken):
    item = authed_client.get("/raw-food").json()[0]
    assert item["freshness_warning"] is None
