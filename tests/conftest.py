"""Shared test fixtures for the Tamil Names API."""

import asyncio
import threading

import pytest
from fastapi.testclient import TestClient

from tamil_names_api.app.core.config import settings
from tamil_names_api.app.core.constants import CATEGORY_PURE_TAMIL, MALE
from tamil_names_api.app.core.db import get_connection, init_db
from tamil_names_api.app.main import create_app


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file for each test."""
    path = str(tmp_path / 'test_tamil_names.db')
    monkeypatch.setattr(settings, 'database_url', path)
    monkeypatch.setattr(settings, 'admin_token', '')
    monkeypatch.setattr(settings, 'auto_approve_threshold', 25)
    init_db(path)
    return path


@pytest.fixture
def client(db_path):
    """Create a test client; entering it runs the startup migrations."""
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def name_payload():
    """Valid submission body."""
    return {
        'name': 'இளங்கோ',
        'meaning': 'இளைய அரசன்',
        'reference': 'சிலப்பதிகாரம் இயற்றிய இளங்கோவடிகள்',
        'gender': MALE,
        'category': CATEGORY_PURE_TAMIL,
        'contributor': 'இலக்கிய ஆர்வலர்',
    }


@pytest.fixture
def make_name(db_path):
    """Insert a name row directly and return its id."""
    counter = {'n': 0}

    def _make(name=None, status='pending', votes=0, contributor=None,
              gender=MALE, category=CATEGORY_PURE_TAMIL, meaning='பொருள்',
              created_at=None):
        counter['n'] += 1
        conn = get_connection(db_path)
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO names (name, meaning, gender, category, contributor, status, votes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, COALESCE(?, CURRENT_TIMESTAMP))
                """,
                (name or f'பெயர்{counter["n"]}', meaning, gender, category,
                 contributor, status, votes, created_at),
            )
            conn.commit()
            return cursor.lastrowid
        finally:
            conn.close()

    return _make


@pytest.fixture
def fetch_row(db_path):
    """Read a single row with a raw query."""

    def _fetch(sql, params=()):
        conn = get_connection(db_path)
        try:
            return conn.execute(sql, params).fetchone()
        finally:
            conn.close()

    return _fetch


@pytest.fixture
def hold_before(monkeypatch):
    """Hold concurrent service calls until all of them reach a statement.

    ``hold_before(module, prefix, parties)`` wraps the connections that
    ``module.get_connection`` hands out.  Each one waits on a shared
    barrier before running SQL starting with ``prefix``, so every caller
    has finished its earlier reads before any of them writes.
    """

    def _hold(module, prefix, parties=2):
        barrier = threading.Barrier(parties, timeout=10)
        real_get_connection = module.get_connection

        class HeldCursor:
            def __init__(self, cursor):
                self._cursor = cursor

            def execute(self, sql, params=()):
                if sql.lstrip().startswith(prefix):
                    barrier.wait()
                return self._cursor.execute(sql, params)

            def __getattr__(self, item):
                return getattr(self._cursor, item)

        class HeldConnection:
            def __init__(self, *args, **kwargs):
                self._conn = real_get_connection(*args, **kwargs)

            def cursor(self):
                return HeldCursor(self._conn.cursor())

            def __getattr__(self, item):
                return getattr(self._conn, item)

        monkeypatch.setattr(module, 'get_connection', HeldConnection)

    return _hold


@pytest.fixture
def run_together():
    """Run the same coroutine function in several threads at once."""

    def _run(func, *args, count=2):
        results = [None] * count
        errors = []

        def worker(index):
            try:
                results[index] = asyncio.run(func(*args))
            except Exception as exc:  # surfaced by the assert below
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert not errors, errors
        return results

    return _run
