"""
Movie API Backend — Authentication Service
============================================

What:  User registration and login, each answering with a signed token.
Why:   Write endpoints (movies, actors, ratings) require a bearer token;
       this is the only place tokens are issued.

Flow:
    register: validate → email unused? → hash password → insert → token
    login:    validate → find by email → verify password → token

Errors:
    400 "Please provide name, email and password"   (register, missing field)
    400 "User already exists with this email"       (register, taken email)
    400 "Please provide email and password"         (login, missing field)
    401 "Incorrect email or password"               (login; never says which)
"""

import logging
from datetime import datetime, timezone

from motor.motor_asyncio import AsyncIOMotorDatabase

from movie_api.exceptions import AuthenticationError, ValidationError
from movie_api.models import USER
from movie_api.repository import MongoRepository
from movie_api.schemas.auth import AuthData, AuthResponse, LoginRequest, RegisterRequest, UserPublic
from movie_api.security import create_access_token, hash_password, public_user, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    async def register(self, db: AsyncIOMotorDatabase, payload: RegisterRequest) -> AuthResponse:
        if not payload.name or not payload.email or not payload.password:
            raise ValidationError(message="Please provide name, email and password")

        repository = MongoRepository(db, USER)
        if await repository.find_one({"email": payload.email}) is not None:
            raise ValidationError(message="User already exists with this email", field="email")

        # The unique index on users.email still guards concurrent registrations
        user = await repository.insert({
            "name": payload.name,
            "email": payload.email,
            "password": hash_password(payload.password),
            "createdAt": datetime.now(timezone.utc),
        })
        logger.info("User registered: %s", user["_id"])
        return self._issue(user)

    async def login(self, db: AsyncIOMotorDatabase, payload: LoginRequest) -> AuthResponse:
        if not payload.email or not payload.password:
            raise ValidationError(message="Please provide email and password")

        user = await MongoRepository(db, USER).find_one({"email": payload.email})
        if user is None or not verify_password(payload.password, user["password"]):
            logger.info("Failed login attempt for %s", payload.email)
            raise AuthenticationError("Incorrect email or password")

        return self._issue(user)

    @staticmethod
    def _issue(user: dict) -> AuthResponse:
        return AuthResponse(
            token=create_access_token(user["_id"]),
            data=AuthData(user=UserPublic(**public_user(user))),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
