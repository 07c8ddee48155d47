"""
Movie API Backend — Actor Route Handlers
==========================================

What:  /api/v1/actors endpoints. Reads are public; writes need a bearer token.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.config import settings
from movie_api.database import get_database
from movie_api.routes.common import api_base_url
from movie_api.schemas.actor import ActorCreate, ActorUpdate
from movie_api.schemas.common import ErrorResponse, MessageResponse, PageEnvelope, RecordResponse
from movie_api.security import get_current_user
from movie_api.services.actor_service import actor_service

router = APIRouter(prefix=f"{settings.api_prefix}/actors", tags=["Actors"])

_ERRORS = {
    400: {"description": "Invalid input or identifier", "model": ErrorResponse},
    404: {"description": "Actor not found", "model": ErrorResponse},
}
_AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}


@router.get("", response_model=PageEnvelope, responses={400: _ERRORS[400]}, summary="List actors")
async def list_actors(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PageEnvelope:
    return await actor_service.list_actors(
        db,
        path=request.url.path,
        query_string=request.url.query,
        base_url=api_base_url(request),
    )


@router.post(
    "",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: _ERRORS[400], **_AUTH_ERRORS},
    summary="Create an actor",
)
async def create_actor(
    payload: ActorCreate,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> RecordResponse:
    actor = await actor_service.create_actor(db, payload, api_base_url(request))
    return RecordResponse(data={"actor": actor})


@router.get("/{actor_id}", response_model=RecordResponse, responses=_ERRORS, summary="Get an actor by ID")
async def get_actor(
    actor_id: str,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> RecordResponse:
    actor = await actor_service.get_actor(db, actor_id, api_base_url(request))
    return RecordResponse(data={"actor": actor})


@router.put(
    "/{actor_id}",
    response_model=RecordResponse,
    responses={**_ERRORS, **_AUTH_ERRORS},
    summary="Update an actor",
)
async def update_actor(
    actor_id: str,
    payload: ActorUpdate,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> RecordResponse:
    actor = await actor_service.update_actor(db, actor_id, payload, api_base_url(request))
    return RecordResponse(data={"actor": actor})


@router.delete(
    "/{actor_id}",
    response_model=MessageResponse,
    responses={**_ERRORS, **_AUTH_ERRORS},
    summary="Delete an actor",
)
async def delete_actor(
    actor_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> MessageResponse:
    await actor_service.delete_actor(db, actor_id)
    return MessageResponse(message="Actor deleted successfully")
