# This file implements the database access facade used by every DAO and request handler.
# It owns the connection pool and exposes two primitives: `query_select` and `query_update`.
# Each primitive leases exactly one pooled connection and releases it on every exit path.
# Result sets are decoded into plain column-name keyed rows so callers never touch driver types.

from __future__ import annotations

import importlib
import logging
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import ModuleType
from typing import Final

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, CursorResult, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.pool import NullPool, QueuePool

from api_project.database.config import DatabaseConfig, build_config
from api_project.database.errors import (
    ConfigurationError,
    DatabaseConnectionError,
    DriverLoadError,
    QueryError,
    UninitializedError,
)
from api_project.database.values import ResultSet, column_kinds, decode_rows, decode_value

LOGGER = logging.getLogger("database")

GENERATED_KEY_COLUMN: Final[str] = "GENERATED_KEY"

# SQL is passed to the driver untouched, so percent signs and colons are never treated as binds.
_RAW_SQL_OPTIONS: Final[dict[str, bool]] = {"no_parameters": True}

# Driver-level failures raised outside the DB-API exception hierarchy while fetching or converting rows.
_FETCH_ERRORS: Final = (SQLAlchemyError, TypeError, ValueError)

# A driver module that does not match the URL dialect fails with plain Python errors.
_DRIVER_MISMATCH_ERRORS: Final = (SQLAlchemyError, TypeError, AttributeError, ImportError)


class DatabaseClient:
    """Connection-pooled SQL execution surface."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._config: DatabaseConfig | None = None
        self._engine: Engine | None = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def config(self) -> DatabaseConfig | None:
        return self._config

    @property
    def checked_out_connections(self) -> int:
        """Number of pooled connections currently leased out."""

        if self._engine is None:
            return 0
        return self._engine.pool.checkedout()

    @property
    def supports_insert_returning(self) -> bool:
        """Whether INSERT statements may carry a RETURNING clause on this database."""

        if self._engine is None:
            return False
        return bool(self._engine.dialect.insert_returning)

    def initialize(self, properties: DatabaseConfig | Mapping[str, str | None]) -> None:
        """Validate properties, test the connection and build the pool.

        Calling this again after a successful initialization does nothing. Every check runs
        before the client is marked initialized, so a failure leaves it untouched.
        """

        with self._lock:
            if self._engine is not None:
                return

            config = build_config(properties)
            module = _load_driver(config.driver)
            url = _build_url(config)
            _test_connection(url, module)
            engine = _create_pool(url, module, config)

            self._config = config
            self._engine = engine

        LOGGER.info(
            "Database pool ready url=%s min_idle=%s max_idle=%s statement_cache=%s",
            url.render_as_string(hide_password=True),
            config.min_idle,
            config.max_idle,
            config.max_open_prepared_statements,
        )

    def query_select(self, sql: str) -> ResultSet:
        """Run a read statement and return its rows in cursor order."""

        with self._leased_connection() as connection:
            try:
                result = connection.exec_driver_sql(sql, execution_options=_RAW_SQL_OPTIONS)
                rows = _decode_result(connection, result)
            except _FETCH_ERRORS as exc:
                LOGGER.exception("Select query failed")
                raise QueryError("An error occurred when trying to query the database.") from exc
        return rows

    def query_update(self, sql: str, use_transaction: bool = False) -> ResultSet:
        """Run a write statement and return the generated keys it reported.

        With `use_transaction` the statement runs in an explicit transaction that is committed
        on success and rolled back on failure. Otherwise it is committed right after execution.
        """

        with self._leased_connection() as connection:
            try:
                if use_transaction:
                    with connection.begin():
                        rows = _execute_update(connection, sql)
                else:
                    rows = _execute_update(connection, sql)
                    connection.commit()
            except _FETCH_ERRORS as exc:
                LOGGER.exception("Update query failed transaction=%s", use_transaction)
                raise QueryError("An error occurred when trying to update the database.") from exc
        return rows

    def can_connect(self) -> bool:
        if self._engine is None:
            return False
        try:
            with self._engine.connect() as connection:
                connection.exec_driver_sql("SELECT 1")
            return True
        except SQLAlchemyError:
            return False

    def _require_engine(self) -> Engine:
        if self._engine is None:
            raise UninitializedError(
                "The database client is not initialized. Call initialize() before running queries."
            )
        return self._engine

    @contextmanager
    def _leased_connection(self) -> Iterator[Connection]:
        engine = self._require_engine()
        try:
            connection = engine.connect()
        except SQLAlchemyError as exc:
            raise QueryError("Could not obtain a connection from the pool.") from exc

        failed = True
        try:
            yield connection
            failed = False
        finally:
            _release(connection, raise_errors=not failed)


def _decode_result(connection: Connection, result: CursorResult) -> ResultSet:
    description = result.cursor.description if result.cursor is not None else None
    kinds = column_kinds([column[1] for column in description or ()], connection.dialect.dbapi)
    return decode_rows(list(result.keys()), result, kinds)


def _execute_update(connection: Connection, sql: str) -> ResultSet:
    result = connection.exec_driver_sql(sql, execution_options=_RAW_SQL_OPTIONS)
    if result.returns_rows:
        return _decode_result(connection, result)
    return _generated_keys(result, sql)


def _generated_keys(result: CursorResult, sql: str) -> ResultSet:
    if _is_insert(sql) and result.lastrowid:
        return [{GENERATED_KEY_COLUMN: decode_value(result.lastrowid)}]
    return []


def _is_insert(sql: str) -> bool:
    return sql.lstrip().upper().startswith(("INSERT", "REPLACE"))


def _release(connection: Connection, *, raise_errors: bool) -> None:
    try:
        connection.close()
    except SQLAlchemyError as exc:
        if not raise_errors:
            # The operation already failed; its error is the one the caller needs to see.
            LOGGER.warning("Cannot close the connection after a failed operation: %s", exc)
            return
        raise QueryError("Cannot close the connection.") from exc


def _load_driver(driver: str) -> ModuleType:
    try:
        module = importlib.import_module(driver)
    except ImportError as exc:
        raise DriverLoadError(f"Driver module {driver!r} not found.") from exc
    if not callable(getattr(module, "connect", None)):
        raise DriverLoadError(f"Module {driver!r} is not a DB-API driver (no connect()).")
    return module


def _build_url(config: DatabaseConfig) -> URL:
    try:
        url = make_url(config.url)
    except ArgumentError as exc:
        raise ConfigurationError(f"Invalid database url: {config.url!r}") from exc
    # SQLite has no authentication and rejects URLs carrying credentials.
    if url.get_backend_name() == "sqlite":
        return url
    return url.set(username=config.username, password=config.password)


def _test_connection(url: URL, module: ModuleType) -> None:
    try:
        throwaway = create_engine(url, module=module, poolclass=NullPool)
    except _DRIVER_MISMATCH_ERRORS as exc:
        raise DatabaseConnectionError(
            f"Cannot create an engine for {url.render_as_string(hide_password=True)}."
        ) from exc

    try:
        with throwaway.connect():
            pass
    except _DRIVER_MISMATCH_ERRORS as exc:
        raise DatabaseConnectionError("Wrong credentials or internal database error.") from exc
    finally:
        throwaway.dispose()

    LOGGER.info("The database connection was configured successfully.")


def _create_pool(url: URL, module: ModuleType, config: DatabaseConfig) -> Engine:
    try:
        engine = create_engine(
            url,
            module=module,
            poolclass=QueuePool,
            pool_size=config.max_idle,
            max_overflow=0,
            pool_pre_ping=True,
            query_cache_size=config.max_open_prepared_statements,
        )
    except _DRIVER_MISMATCH_ERRORS as exc:
        raise DatabaseConnectionError("Cannot build the connection pool.") from exc

    leased: list[Connection] = []
    try:
        for _ in range(config.min_idle):
            leased.append(engine.connect())
    except _DRIVER_MISMATCH_ERRORS as exc:
        for connection in leased:
            connection.close()
        engine.dispose()
        raise DatabaseConnectionError("Could not open the minimum number of idle connections.") from exc

    for connection in leased:
        connection.close()
    return engine
