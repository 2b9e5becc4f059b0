"""
Shared test configuration.
Database tests run against a throwaway SQLite file through the stdlib `sqlite3` driver,
so no database server is needed unless integration tests are enabled explicitly.
"""

from __future__ import annotations

import os
import sqlite3
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

TEST_ENV_DEFAULTS = {
    "PROJECT_NAME": "test-project",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "API_HOST": "0.0.0.0",
    "API_PORT": "8000",
}

# The API module builds its app at import time, before any fixture runs.
for _key, _value in TEST_ENV_DEFAULTS.items():
    os.environ.setdefault(_key, _value)

from api_project.database.client import DatabaseClient  # noqa: E402

ACTOR_SEED = (
    (1, "PENELOPE", "GUINESS", "2006-02-15 04:34:33"),
    (2, "NICK", "WAHLBERG", "2006-02-15 04:34:33"),
    (3, "ED", "CHASE", "2006-02-15 04:34:33"),
)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in TEST_ENV_DEFAULTS.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


@pytest.fixture()
def sqlite_path(tmp_path: Path) -> Path:
    """Create a SQLite database with the `actors` and `actor` tables populated."""

    path = tmp_path / "api_project.sqlite"
    connection = sqlite3.connect(path)
    try:
        connection.executescript(
            """
            CREATE TABLE actors (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL UNIQUE
            );
            INSERT INTO actors (id, name) VALUES (1, 'Alice'), (2, 'Bob');

            CREATE TABLE actor (
                actor_id INTEGER PRIMARY KEY,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                last_update TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        connection.executemany(
            "INSERT INTO actor (actor_id, first_name, last_name, last_update) VALUES (?, ?, ?, ?)",
            ACTOR_SEED,
        )
        connection.commit()
    finally:
        connection.close()
    return path


@pytest.fixture()
def db_properties(sqlite_path: Path) -> dict[str, str]:
    return {
        "url": f"sqlite:///{sqlite_path}",
        "driver": "sqlite3",
        "username": "test_user",
        "password": "test_password",
    }


@pytest.fixture()
def db_client(db_properties: dict[str, str]) -> DatabaseClient:
    client = DatabaseClient()
    client.initialize(db_properties)
    return client
