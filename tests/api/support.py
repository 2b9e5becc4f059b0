# This file provides shared helpers for API endpoint tests.
# It exists so tests can override dependencies without touching a database server.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient

from api_project.api.app import app
from api_project.api.dependencies import get_actor_dao, get_database_client
from api_project.dao.base import DaoError
from api_project.dao.models import Actor


class FakeDBClient:
    """Simple fake database client for readiness endpoint tests."""

    def __init__(self, *, connected: bool = True) -> None:
        self._connected = connected

    def can_connect(self) -> bool:
        return self._connected


class FakeActorDao:
    def __init__(self, actors: list[Actor] | None = None, *, fail: bool = False) -> None:
        self._actors = actors or []
        self._fail = fail

    def _check(self) -> None:
        if self._fail:
            raise DaoError("database unavailable")

    def get_all(self) -> list[Actor]:
        self._check()
        return list(self._actors)

    def get_by_id(self, actor_id: int) -> Actor | None:
        self._check()
        return next((actor for actor in self._actors if actor.actor_id == actor_id), None)

    def get_by_first_name(self, first_name: str) -> list[Actor]:
        self._check()
        return [actor for actor in self._actors if actor.first_name == first_name]

    def count(self) -> int:
        self._check()
        return len(self._actors)


@contextmanager
def api_test_client(
    *,
    db_client: Any | None = None,
    actor_dao: Any | None = None,
    db_client_factory: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    if db_client_factory is not None:
        app.dependency_overrides[get_database_client] = db_client_factory
    if actor_dao is not None:
        app.dependency_overrides[get_actor_dao] = lambda: actor_dao

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
