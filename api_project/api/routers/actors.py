# This file defines the actor catalog endpoints.
# DAO failures are downgraded to an empty payload with `error: true` instead of an HTTP error,
# which is the contract existing clients of the actor listing expect.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from api_project.api.dependencies import get_actor_dao
from api_project.api.schemas import ActorCountResponse, ActorListResponse
from api_project.dao.actor_dao import ActorDao
from api_project.dao.base import DaoError
from api_project.dao.models import Actor

router = APIRouter(prefix="/actors", tags=["actors"])
ActorDaoDep = Annotated[ActorDao, Depends(get_actor_dao)]


def _envelope(actors: list[Actor]) -> dict[str, object]:
    return {"error": False, "data": [actor.to_dict() for actor in actors]}


@router.get("", response_model=ActorListResponse)
def list_actors(
    dao: ActorDaoDep,
    first_name: Annotated[str | None, Query(min_length=1, max_length=45)] = None,
) -> dict[str, object]:
    try:
        actors = dao.get_by_first_name(first_name) if first_name else dao.get_all()
    except DaoError:
        return {"error": True, "data": []}
    return _envelope(actors)


@router.get("/count", response_model=ActorCountResponse)
def count_actors(dao: ActorDaoDep) -> dict[str, object]:
    try:
        total = dao.count()
    except DaoError:
        return {"error": True, "total": 0}
    return {"error": False, "total": total}


@router.get("/{actor_id}", response_model=ActorListResponse)
def get_actor(actor_id: int, dao: ActorDaoDep) -> dict[str, object]:
    try:
        actor = dao.get_by_id(actor_id)
    except DaoError:
        return {"error": True, "data": []}
    return _envelope([actor] if actor is not None else [])
