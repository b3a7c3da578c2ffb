from freezer_tracker.config import get_setting


def test_preferences_round_trip(authed_client):
    assert authed_client.get("/preferences").json() == {}
    resp = authed_client.put("/preferences/view_mode", json={"value": "grid"})
    assert resp.json() == {"key": "view_mode", "value": "grid"}
    authed_client.put("/preferences/view_mode", json={"value": "list"})
    assert authed_client.get("/preferences").json() == {"view_mode": "list"}
    assert get_setting("view_mode") == "list"


def test_unknown_preference_uses_default():
    assert get_setting("sort_order", "newest") == "newest"


def test_rejects_bad_keys(authed_client):
    assert authed_client.put("/preferences/bad key!", json={"value": "x"}).status_code == 400
