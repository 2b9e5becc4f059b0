# This file defines the error taxonomy raised by the database access layer.
# Callers catch `DatabaseError` to handle every failure the layer can produce.
# Driver exceptions are chained as `__cause__` so the original failure stays inspectable.

from __future__ import annotations


class DatabaseError(Exception):
    """Base class for failures surfaced by the database access layer."""


class ConfigurationError(DatabaseError):
    """A required connection property is missing or invalid."""


class UninitializedError(ConfigurationError):
    """A query was attempted before the client was initialized."""


class DriverLoadError(DatabaseError):
    """The configured DB-API driver module could not be imported."""


class DatabaseConnectionError(DatabaseError):
    """The fail-fast test connection could not be established."""


class QueryError(DatabaseError):
    """Leasing a connection, executing a statement, or decoding its result failed."""
