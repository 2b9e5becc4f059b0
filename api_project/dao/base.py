# This file holds the shared plumbing for DAOs: error translation and literal quoting.
# The database client executes complete SQL text without parameter binding,
# so every value a DAO interpolates must pass through `quote_literal` or be an int.

from __future__ import annotations

import logging

from api_project.database.client import DatabaseClient
from api_project.database.errors import DatabaseError
from api_project.database.values import ResultSet

LOGGER = logging.getLogger("dao")


class DaoError(Exception):
    """Raised when a DAO cannot complete a database operation."""


def quote_literal(value: str) -> str:
    """Render a string as an SQL literal with embedded quotes doubled."""

    return "'" + value.replace("'", "''") + "'"


class Dao:
    """Base class giving DAOs access to the shared database client."""

    def __init__(self, db: DatabaseClient) -> None:
        self._db = db

    def _select(self, sql: str) -> ResultSet:
        try:
            return self._db.query_select(sql)
        except DatabaseError as exc:
            LOGGER.warning("%s select failed: %s", type(self).__name__, exc)
            raise DaoError(f"{type(self).__name__} could not read from the database.") from exc

    def _update(self, sql: str, *, use_transaction: bool = False) -> ResultSet:
        try:
            return self._db.query_update(sql, use_transaction)
        except DatabaseError as exc:
            LOGGER.warning("%s update failed: %s", type(self).__name__, exc)
            raise DaoError(f"{type(self).__name__} could not write to the database.") from exc
