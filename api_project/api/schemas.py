# This file defines response models for the API endpoints.
# Actor responses keep the `{"error": ..., "data": [...]}` envelope existing clients rely on.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ActorOut(BaseModel):
    actor_id: int
    first_name: str
    last_name: str
    last_update: datetime | None = None


class ActorListResponse(BaseModel):
    error: bool
    data: list[ActorOut]


class HealthResponse(BaseModel):
    request_id: str
    status: str
    environment: str
    service_name: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    request_id: str
    db_connected: bool
    ready: bool
    database: str
    timestamp: datetime


class VersionResponse(BaseModel):
    request_id: str
    project: str
    version: str
    timestamp: datetime


class ActorCountResponse(BaseModel):
    error: bool
    total: int
