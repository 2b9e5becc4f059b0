"""Factory handing out DAOs that share one database client."""

from __future__ import annotations

from functools import cached_property

from api_project.dao.actor_dao import ActorDao
from api_project.database.client import DatabaseClient


class DaoManager:
    def __init__(self, db: DatabaseClient) -> None:
        self._db = db

    @cached_property
    def actor_dao(self) -> ActorDao:
        return ActorDao(self._db)
