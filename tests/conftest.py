import os
from datetime import date, timedelta

import pytest


@pytest.fixture(scope="session", autouse=True)
def set_test_env(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DB_PATH"] = str(db_file)
    os.environ["APP_PASSWORD"] = "testpass"
    os.environ["SECRET_KEY"] = "test-secret-key-for-testing"


@pytest.fixture(autouse=True)
def empty_freezer(set_test_env):
    """Start every test with no items, no dismissals and default thresholds."""
    from freezer_tracker.db.database import get_connection, init_db, seed_freshness_defaults
    init_db()
    conn = get_connection()
    try:
        for table in ("raw_food", "prepared_meals", "breast_milk",
                      "red_zone_dismissals", "freshness_settings", "settings"):
            conn.execute(f"DELETE FROM {table}")
        conn.commit()
        seed_freshness_defaults(conn)
    finally:
        conn.close()


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture(scope="session")
def authed_client(client):
    client.post("/login", json={"password": "testpass"})
    return client


def _days_ago(n: int) -> str:
    return (date.today() - timedelta(days=n)).isoformat()


@pytest.fixture
def days_ago():
    return _days_ago


@pytest.fixture
def chicken():
    """Two kilos of chicken breast added 20 days ago."""
    from freezer_tracker.core import raw_food
    return raw_food.create({
        "sub_category": "Poultry",
        "name": "Chicken Breast",
        "amount": 2.0,
        "measuring_unit": "kg",
        "date_added": _days_ago(20),
        "comment": "skin on",
    })
