"""
Unit tests for database configuration loading and validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from api_project.database.config import (
    MAX_IDLE,
    MAX_OPEN_PREPARED_STATEMENTS,
    MIN_IDLE,
    DatabaseConfig,
    build_config,
    load_database_properties,
)
from api_project.database.errors import ConfigurationError

VALID_PROPERTIES = {
    "url": "postgresql://db.internal:5432/sakila",
    "driver": "psycopg2",
    "username": "sakila",
    "password": "secret",
}


def test_build_config_accepts_complete_properties() -> None:
    config = build_config(VALID_PROPERTIES)
    assert config.url == VALID_PROPERTIES["url"]
    assert config.driver == "psycopg2"
    assert (config.min_idle, config.max_idle, config.max_open_prepared_statements) == (5, 10, 100)
    assert (MIN_IDLE, MAX_IDLE, MAX_OPEN_PREPARED_STATEMENTS) == (5, 10, 100)


def test_build_config_returns_existing_config_unchanged() -> None:
    config = DatabaseConfig(**VALID_PROPERTIES)
    assert build_config(config) is config


@pytest.mark.parametrize("missing_key", ["url", "driver", "username", "password"])
def test_build_config_reports_missing_property(missing_key: str) -> None:
    properties = {key: value for key, value in VALID_PROPERTIES.items() if key != missing_key}
    with pytest.raises(ConfigurationError, match=missing_key):
        build_config(properties)


def test_build_config_treats_blank_values_as_missing() -> None:
    properties = {**VALID_PROPERTIES, "password": "   ", "username": None}
    with pytest.raises(ConfigurationError, match="username, password"):
        build_config(properties)


def test_config_is_immutable() -> None:
    config = build_config(VALID_PROPERTIES)
    with pytest.raises(ValidationError):
        config.url = "sqlite://"  # type: ignore[misc]


def test_config_repr_hides_password() -> None:
    assert "secret" not in repr(build_config(VALID_PROPERTIES))


def test_load_properties_from_file(tmp_path: Path) -> None:
    properties_file = tmp_path / "database.properties"
    properties_file.write_text(
        "url=sqlite:///actors.db\ndriver=sqlite3\nusername=reader\npassword=hunter2\n",
        encoding="utf-8",
    )
    assert load_database_properties(properties_file) == {
        "url": "sqlite:///actors.db",
        "driver": "sqlite3",
        "username": "reader",
        "password": "hunter2",
    }


def test_load_properties_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_URL", "sqlite:///actors.db")
    monkeypatch.setenv("DB_DRIVER", "sqlite3")
    monkeypatch.setenv("DB_USERNAME", "reader")
    monkeypatch.delenv("DB_PASSWORD", raising=False)

    properties = load_database_properties(load_env=False)

    assert properties["url"] == "sqlite:///actors.db"
    assert properties["password"] is None
    with pytest.raises(ConfigurationError, match="password"):
        build_config(properties)
