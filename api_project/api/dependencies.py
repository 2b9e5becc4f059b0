# This file provides dependency factories for FastAPI routes.
# The database client is created and initialized once, then shared through dependency injection.
# Creation is serialized so concurrent first requests share one client and one pool.
# A failed initialization is not kept, so the next request retries it.

from __future__ import annotations

import threading
from typing import Annotated

from fastapi import Depends

from api_project.common.settings import Settings, get_settings
from api_project.dao.actor_dao import ActorDao
from api_project.dao.manager import DaoManager
from api_project.database.client import DatabaseClient
from api_project.database.config import load_database_properties

_CLIENT_LOCK = threading.Lock()
_database_client: DatabaseClient | None = None


def get_database_client() -> DatabaseClient:
    global _database_client
    if _database_client is None:
        with _CLIENT_LOCK:
            if _database_client is None:
                db = DatabaseClient()
                db.initialize(load_database_properties())
                _database_client = db
    return _database_client


def get_dao_manager(db: Annotated[DatabaseClient, Depends(get_database_client)]) -> DaoManager:
    return DaoManager(db)


def get_actor_dao(manager: Annotated[DaoManager, Depends(get_dao_manager)]) -> ActorDao:
    return manager.actor_dao


def get_config() -> Settings:
    return get_settings()
