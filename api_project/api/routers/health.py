# This file defines liveness, readiness, and version endpoints for API operations.
# The readiness check confirms that the database client is initialized and can reach the database.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from api_project.api.dependencies import get_config, get_database_client
from api_project.api.schemas import HealthResponse, ReadinessResponse, VersionResponse
from api_project.common.settings import Settings
from api_project.database.client import DatabaseClient

router = APIRouter(tags=["health"])
ConfigDep = Annotated[Settings, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.ENV,
        "service_name": config.PROJECT_NAME,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request, db: DBDep) -> dict[str, object]:
    db_connected = db.can_connect()
    return {
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "ready": db_connected,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "project": config.PROJECT_NAME,
        "version": config.APP_VERSION,
        "timestamp": _utc_now(),
    }
