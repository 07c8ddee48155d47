"""
Movie API Backend — Movie Route Handlers
==========================================

What:  /api/v1/movies endpoints.

    GET    /movies                 public   paginated list (query language)
    POST   /movies                 bearer   create
    GET    /movies/{id}            public   detail
    PUT    /movies/{id}            bearer   partial update
    DELETE /movies/{id}            bearer   delete
    GET    /movies/{id}/ratings    public   every rating of the movie
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.config import settings
from movie_api.database import get_database
from movie_api.routes.common import api_base_url
from movie_api.schemas.common import (
    ErrorResponse,
    MessageResponse,
    PageEnvelope,
    RecordListResponse,
    RecordResponse,
)
from movie_api.schemas.movie import MovieCreate, MovieUpdate
from movie_api.security import get_current_user
from movie_api.services.movie_service import movie_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix=f"{settings.api_prefix}/movies", tags=["Movies"])

_ERRORS = {
    400: {"description": "Invalid input or identifier", "model": ErrorResponse},
    404: {"description": "Movie not found", "model": ErrorResponse},
}
_AUTH_ERRORS = {401: {"description": "Missing or invalid token", "model": ErrorResponse}}


@router.get(
    "",
    response_model=PageEnvelope,
    responses={400: _ERRORS[400]},
    summary="List movies",
    description=(
        "Filter with `field=value` or `field[gte|gt|lte|lt]=value`, order with "
        "`sort=-releaseYear,title`, select with `fields=title,genre`, and page "
        "with `page` and `limit`."
    ),
)
async def list_movies(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PageEnvelope:
    return await movie_service.list_movies(
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
    summary="Create a movie",
)
async def create_movie(
    payload: MovieCreate,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> RecordResponse:
    movie = await movie_service.create_movie(db, payload, api_base_url(request))
    return RecordResponse(data={"movie": movie})


@router.get(
    "/{movie_id}",
    response_model=RecordResponse,
    responses=_ERRORS,
    summary="Get a movie by ID",
)
async def get_movie(
    movie_id: str,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> RecordResponse:
    movie = await movie_service.get_movie(db, movie_id, api_base_url(request))
    return RecordResponse(data={"movie": movie})


@router.put(
    "/{movie_id}",
    response_model=RecordResponse,
    responses={**_ERRORS, **_AUTH_ERRORS},
    summary="Update a movie",
)
async def update_movie(
    movie_id: str,
    payload: MovieUpdate,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> RecordResponse:
    movie = await movie_service.update_movie(db, movie_id, payload, api_base_url(request))
    return RecordResponse(data={"movie": movie})


@router.delete(
    "/{movie_id}",
    response_model=MessageResponse,
    responses={**_ERRORS, **_AUTH_ERRORS},
    summary="Delete a movie",
)
async def delete_movie(
    movie_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> MessageResponse:
    await movie_service.delete_movie(db, movie_id)
    return MessageResponse(message="Movie deleted successfully")


@router.get(
    "/{movie_id}/ratings",
    response_model=RecordListResponse,
    responses=_ERRORS,
    summary="List the ratings of a movie",
)
async def list_movie_ratings(
    movie_id: str,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> RecordListResponse:
    return await movie_service.list_movie_ratings(db, movie_id, api_base_url(request))
