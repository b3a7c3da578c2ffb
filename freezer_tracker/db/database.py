"""SQLite database connection management and schema initialization.

Provides a single-file database at ~/.freezer_tracker/freezer.db.
Every public function that needs a connection should call get_connection(),
use it, and close it in a finally block.
"""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

# (category, sub_category, fresh_days, good_days, use_soon_days)
DEFAULT_FRESHNESS = [
    ("raw_food", "Poultry", 90, 180, 270),
    ("raw_food", "Red Meat", 120, 240, 365),
    ("raw_food", "Fish/Seafood", 90, 180, 270),
    ("raw_food", "Ground Meat", 60, 120, 180),
    ("raw_food", "Vegetables", 180, 300, 365),
    ("raw_food", "Fruits", 180, 300, 365),
    ("raw_food", "Other", 90, 180, 270),
    ("prepared_meals", None, 30, 60, 90),
    ("breast_milk", None, 90, 180, 270),
]


def get_db_path() -> Path:
    """Return the active DB path.

    Priority order:
    1. DB_PATH environment variable (used by Docker / tests)
    2. Default ~/.freezer_tracker/freezer.db
    """
    env_path = os.environ.get("DB_PATH")
    if env_path:
        p = Path(env_path)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    db_dir = Path.home() / ".freezer_tracker"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "freezer.db"


def get_connection(db_path: Path = None) -> sqlite3.Connection:
    """Return a new SQLite connection with Row factory enabled.

    Callers are responsible for closing the connection when done.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: Path = None) -> None:
    """Create all tables if they don't already exist, then seed defaults.

    Called once at application startup from app/main.py.
    Tables: raw_food, prepared_meals, breast_milk, freshness_settings,
    red_zone_dismissals, settings.
    """
    conn = get_connection(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS raw_food (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                sub_category   TEXT NOT NULL,
                name           TEXT NOT NULL,
                amount         REAL NOT NULL,
                measuring_unit TEXT NOT NULL CHECK (measuring_unit IN ('kg', 'pieces')),
                date_added     TEXT NOT NULL,
                comment        TEXT,
                date_removed   TEXT,
                created_at     TEXT DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS prepared_meals (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                name         TEXT NOT NULL,
                portions     INTEGER NOT NULL,
                date_added   TEXT NOT NULL,
                comment      TEXT,
                date_removed TEXT,
                created_at   TEXT DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS breast_milk (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                date_expressed TEXT NOT NULL,
                date_added     TEXT NOT NULL,
                volume_ml      INTEGER NOT NULL,
                comment        TEXT,
                date_removed   TEXT,
                created_at     TEXT DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS freshness_settings (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                category      TEXT NOT NULL,
                sub_category  TEXT,
                fresh_days    INTEGER NOT NULL,
                good_days     INTEGER NOT NULL,
                use_soon_days INTEGER NOT NULL,
                UNIQUE(category, sub_category)
            );

            CREATE TABLE IF NOT EXISTS red_zone_dismissals (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                dismissed_date TEXT NOT NULL UNIQUE
            );

            CREATE TABLE IF NOT EXISTS settings (
                key   TEXT PRIMARY KEY,
                value TEXT
            );
        """)
        conn.commit()
        seed_freshness_defaults(conn)
    finally:
        conn.close()


def seed_freshness_defaults(conn: sqlite3.Connection) -> int:
    """Insert any missing default freshness rows. Existing rows are never touched.

    UNIQUE(category, sub_category) does not stop duplicate NULL sub-categories
    in SQLite, so presence is checked with IS before inserting.
    Returns the number of rows inserted.
    """
    inserted = 0
    for category, sub_category, fresh, good, use_soon in DEFAULT_FRESHNESS:
        existing = conn.execute(
            "SELECT id FROM freshness_settings WHERE category = ? AND sub_category IS ?",
            (category, sub_category),
        ).fetchone()
        if existing:
            continue
        conn.execute(
            """INSERT INTO freshness_settings
               (category, sub_category, fresh_days, good_days, use_soon_days)
               VALUES (?, ?, ?, ?, ?)""",
            (category, sub_category, fresh, good, use_soon),
        )
        inserted += 1
    conn.commit()
    if inserted:
        logger.info("Seeded %d default freshness settings", inserted)
    return inserted
