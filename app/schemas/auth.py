"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, EmailStr, Field

from app.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.schemas.envelope import ApiModel


class RegisterRequest(BaseModel):
    """Registration payload."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN
    )


class PublicUser(ApiModel):
    """User as exposed to clients (no password hash)."""

    id: str
    name: str
    email: str


class AuthResult(ApiModel):
    """Returned by register and login."""

    user: PublicUser
    access_token: str


class CurrentUser(BaseModel):
    """Authenticated requester (id, email) for dependency injection."""

    id: str
    email: str | None = None
