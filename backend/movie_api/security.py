"""
Movie API Backend — Authentication Helpers
============================================

What:  Password hashing, JWT issuing/decoding, and the `get_current_user`
       FastAPI dependency that protects write endpoints.
How:   passlib `CryptContext` (pbkdf2_sha256) for passwords; python-jose for
       HS256 tokens whose `sub` claim is the user's ObjectId.

Token lifecycle:
    register/login ──▶ create_access_token(user_id) ──▶ client
    client ──▶ Authorization: Bearer <token> ──▶ get_current_user ──▶ user dict

Every failure surfaces as AuthenticationError (401):
    no header          "You are not logged in! Please log in to get access."
    expired token      "Your token has expired! Please log in again."
    bad signature etc. "Invalid token. Please log in again!"
    user deleted       "The user belonging to this token does no longer exist."
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from motor.motor_asyncio import AsyncIOMotorDatabase
from passlib.context import CryptContext

from movie_api.config import settings
from movie_api.database import get_database
from movie_api.exceptions import AuthenticationError, InvalidIdentifierError
from movie_api.models import USER
from movie_api.repository import MongoRepository

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# auto_error=False: a missing header becomes our own 401 body, not FastAPI's 403
bearer = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed token for `subject` (the user id)."""
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(minutes=settings.jwt_expires_minutes)
    payload = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a token.

    Raises:
        AuthenticationError: expired, tampered or malformed token
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationError("Your token has expired! Please log in again.")
    except JWTError:
        raise AuthenticationError("Invalid token. Please log in again!")

    if not claims.get("sub"):
        raise AuthenticationError("Invalid token. Please log in again!")
    return claims


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """The user fields safe to return to clients."""
    return {
        "id": user.get("id") or user.get("_id"),
        "name": user.get("name"),
        "email": user.get("email"),
    }


async def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> Dict[str, Any]:
    """
    FastAPI dependency resolving the bearer token into the stored user.

    Returns the user document without its password hash.
    """
    if not creds or not creds.credentials:
        raise AuthenticationError()

    claims = decode_access_token(creds.credentials)
    try:
        user = await MongoRepository(db, USER).get(claims["sub"])
    except InvalidIdentifierError:
        raise AuthenticationError("Invalid token. Please log in again!")

    if user is None:
        logger.info("Token presented for deleted user %s", claims["sub"])
        raise AuthenticationError("The user belonging to this token does no longer exist.")

    user.pop("password", None)
    return user
