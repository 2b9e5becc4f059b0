# This file defines the connection configuration bundle used to initialize the database client.
# It exists so callers can hand over any key-value source (properties file, environment, dict).
# Pool policy values are fixed constants and are exposed read-only on the config object.
# Validation errors are reported as `ConfigurationError` naming every missing property.

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from dotenv import dotenv_values, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from api_project.database.errors import ConfigurationError

REQUIRED_PROPERTIES: Final[tuple[str, ...]] = ("url", "driver", "username", "password")

# Environment variable consulted for each property when no properties file is given.
ENV_PROPERTY_NAMES: Final[dict[str, str]] = {
    "url": "DB_URL",
    "driver": "DB_DRIVER",
    "username": "DB_USERNAME",
    "password": "DB_PASSWORD",
}

MIN_IDLE: Final[int] = 5
MAX_IDLE: Final[int] = 10
MAX_OPEN_PREPARED_STATEMENTS: Final[int] = 100


class DatabaseConfig(BaseModel):
    """Immutable connection settings for the pooled database client."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str
    driver: str
    username: str
    password: str = Field(repr=False)

    @field_validator("url", "driver", "username", "password")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Value must be a non-empty string.")
        return value

    @property
    def min_idle(self) -> int:
        return MIN_IDLE

    @property
    def max_idle(self) -> int:
        return MAX_IDLE

    @property
    def max_open_prepared_statements(self) -> int:
        return MAX_OPEN_PREPARED_STATEMENTS


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


def build_config(properties: DatabaseConfig | Mapping[str, str | None]) -> DatabaseConfig:
    """Validate a key-value property source into a `DatabaseConfig`."""

    if isinstance(properties, DatabaseConfig):
        return properties

    missing = [key for key in REQUIRED_PROPERTIES if _is_blank(properties.get(key))]
    if missing:
        raise ConfigurationError(
            f"Missing database properties: {', '.join(missing)}. "
            "Check the file containing database properties."
        )

    try:
        return DatabaseConfig.model_validate({key: properties[key] for key in REQUIRED_PROPERTIES})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid database properties: {exc}") from exc


def load_database_properties(
    path: str | Path | None = None, *, load_env: bool = True
) -> dict[str, str | None]:
    """Read raw database properties from a key=value file or from `DB_*` environment variables."""

    if path is not None:
        values = dotenv_values(path)
        return {key: values.get(key) for key in REQUIRED_PROPERTIES}

    if load_env:
        load_dotenv()
    return {key: os.getenv(env_name) for key, env_name in ENV_PROPERTY_NAMES.items()}
