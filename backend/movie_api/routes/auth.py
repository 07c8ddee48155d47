"""
Movie API Backend — Authentication Route Handlers
===================================================

What:  POST /api/v1/auth/register and POST /api/v1/auth/login.
       Both answer `{status, token, data: {user}}`.
"""

from fastapi import APIRouter, Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.config import settings
from movie_api.database import get_database
from movie_api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from movie_api.schemas.common import ErrorResponse
from movie_api.services.auth_service import auth_service

router = APIRouter(prefix=f"{settings.api_prefix}/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing field or email taken", "model": ErrorResponse}},
    summary="Create an account",
)
async def register(
    payload: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> AuthResponse:
    return await auth_service.register(db, payload)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        400: {"description": "Missing email or password", "model": ErrorResponse},
        401: {"description": "Incorrect email or password", "model": ErrorResponse},
    },
    summary="Log in",
)
async def login(
    payload: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> AuthResponse:
    return await auth_service.login(db, payload)
