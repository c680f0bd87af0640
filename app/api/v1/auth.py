"""Register/login routes and the get_current_user dependency."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import sessionmaker

from app.core.database import get_session_factory
from app.core.errors import Unauthorized
from app.core.security import decode_access_token
from app.schemas.auth import AuthResult, CurrentUser, LoginRequest, RegisterRequest
from app.schemas.envelope import ApiResponse
from app.services.auth import AuthService

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_auth_service(
    session_factory: Annotated[sessionmaker, Depends(get_session_factory)],
) -> AuthService:
    return AuthService(session_factory)


@router.post("/register", response_model=ApiResponse[AuthResult], status_code=201)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[AuthResult]:
    """Create an account and return the user with an access token."""
    result = service.register(body.name, str(body.email), body.password)
    return ApiResponse[AuthResult](data=result)


@router.post("/login", response_model=ApiResponse[AuthResult])
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> ApiResponse[AuthResult]:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <accessToken>
    """
    result = service.login(str(body.email), body.password)
    return ApiResponse[AuthResult](data=result)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the requester. Raises Unauthorized otherwise."""
    if credentials is None:
        raise Unauthorized("Missing access token")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise Unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise Unauthorized("Invalid token payload")
    return CurrentUser(id=str(sub), email=payload.get("email"))
