"""
Movie API Backend — Authentication Schemas
============================================

What:  Register/login bodies and the token response.
Why:   Required fields are checked by AuthService so the client gets one
       message naming all of them; format rules (email shape, password
       length) are checked here when a value is present.
"""

import re
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator

# Deliberately loose: one "@", something on each side, a dot in the domain
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

PASSWORD_MIN_LENGTH = 8


def _check_email(v: str) -> str:
    v = v.strip().lower()
    if v and not _EMAIL_PATTERN.match(v):
        raise ValueError("Please provide a valid email")
    return v


EmailText = Annotated[str, AfterValidator(_check_email)]


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailText] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError("Password must have at least 8 characters")
        return v


class LoginRequest(BaseModel):
    email: Optional[EmailText] = None
    password: Optional[str] = None


class UserPublic(BaseModel):
    """User fields returned to clients. The password hash never leaves the service."""

    id: str
    name: str
    email: str


class AuthData(BaseModel):
    user: UserPublic


class AuthResponse(BaseModel):
    """
    Body of register/login.

    Example:
        {"status": "success", "token": "eyJ...", "data": {"user": {"id": "...", "name": "Ada", "email": "ada@example.com"}}}
    """

    status: str = Field(default="success")
    token: str
    data: AuthData
