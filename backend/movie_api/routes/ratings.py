"""
Movie API Backend — Rating Route Handlers
===========================================

What:  /api/v1/ratings endpoints. The author of a new rating is always the
       authenticated caller; a `user` field in the body is ignored.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.config import settings
from movie_api.database import get_database
from movie_api.routes.common import api_base_url
from movie_api.schemas.common import ErrorResponse, PageEnvelope, RecordResponse
from movie_api.schemas.rating import RatingCreate
from movie_api.security import get_current_user
from movie_api.services.rating_service import rating_service

router = APIRouter(prefix=f"{settings.api_prefix}/ratings", tags=["Ratings"])

_ERRORS = {
    400: {"description": "Invalid input or identifier", "model": ErrorResponse},
    404: {"description": "Rating or rated movie not found", "model": ErrorResponse},
}


@router.get("", response_model=PageEnvelope, responses={400: _ERRORS[400]}, summary="List ratings")
async def list_ratings(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PageEnvelope:
    return await rating_service.list_ratings(
        db,
        path=request.url.path,
        query_string=request.url.query,
        base_url=api_base_url(request),
    )


@router.post(
    "",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_ERRORS, 401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Rate a movie",
)
async def create_rating(
    payload: RatingCreate,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> RecordResponse:
    rating = await rating_service.create_rating(db, payload, current_user, api_base_url(request))
    return RecordResponse(data={"rating": rating})


@router.get("/{rating_id}", response_model=RecordResponse, responses=_ERRORS, summary="Get a rating by ID")
async def get_rating(
    rating_id: str,
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> RecordResponse:
    rating = await rating_service.get_rating(db, rating_id, api_base_url(request))
    return RecordResponse(data={"rating": rating})
