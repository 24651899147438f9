"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  SQLite is used as an embedded store; every request
opens its own connection and closes it when done.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS names (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            meaning TEXT NOT NULL,
            reference TEXT,
            gender TEXT NOT NULL CHECK(gender IN ('ஆண்கள்', 'பெண்கள்')),
            category TEXT NOT NULL CHECK(category IN ('தனித்துவமான', 'நவீன', 'தூய தமிழ்', 'இயற்கை')),
            contributor TEXT,
            status TEXT NOT NULL DEFAULT 'pending' CHECK(status IN ('pending', 'approved', 'admin', 'rejected')),
            votes INTEGER NOT NULL DEFAULT 0 CHECK(votes >= 0),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- One row per (session, name).  The UNIQUE pair is what keeps two
        -- racing toggles from recording the same vote twice.
        CREATE TABLE IF NOT EXISTS votes (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_session_id TEXT NOT NULL,
            name_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(name_id) REFERENCES names(id) ON DELETE CASCADE,
            UNIQUE(user_session_id, name_id)
        );

        CREATE TABLE IF NOT EXISTS favorites (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_session_id TEXT NOT NULL,
            name_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(name_id) REFERENCES names(id) ON DELETE CASCADE,
            UNIQUE(user_session_id, name_id)
        );

        CREATE INDEX IF NOT EXISTS idx_names_status ON names(status);
        CREATE INDEX IF NOT EXISTS idx_names_gender ON names(gender);
        CREATE INDEX IF NOT EXISTS idx_names_category ON names(category);
        CREATE INDEX IF NOT EXISTS idx_votes_user_session ON votes(user_session_id);
        CREATE INDEX IF NOT EXISTS idx_votes_name_id ON votes(name_id);
        CREATE INDEX IF NOT EXISTS idx_favorites_user_session ON favorites(user_session_id);
        """,
    ),
    # Migration 2: favorites are counted per name on every listing
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_favorites_name_id ON favorites(name_id);
        """,
    ),
]


def get_database_path(db_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute (or the special ``:memory:``
    name), use it directly.  Otherwise resolve it relative to the
    project root.
    """
    db_url = db_url or settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # tamil_names_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign keys are switched on for the lifetime of the
    connection; without them deleting a name would leave its votes and
    favorites behind.
    """
    conn = sqlite3.connect(db_path or get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> int:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  Returns the schema version after the run.
    """
    path = db_path or get_database_path()
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)

    with get_cursor(path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s to %s", version, path)
                current_version = version
    return current_version
