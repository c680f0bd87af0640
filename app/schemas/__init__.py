"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResult,
    CurrentUser,
    LoginRequest,
    PublicUser,
    RegisterRequest,
)
from app.schemas.board import (
    BoardCreateRequest,
    BoardDetail,
    BoardRead,
    ColumnCreateRequest,
    ColumnRead,
    ColumnWithCards,
)
from app.schemas.card import (
    CardCreateRequest,
    CardMoveRequest,
    CardRead,
    CardUpdateRequest,
)
from app.schemas.envelope import ApiResponse, DeletedOut, ErrorBody, FieldErrorOut
from app.schemas.health import HealthOut

__all__ = [
    "ApiResponse",
    "AuthResult",
    "BoardCreateRequest",
    "BoardDetail",
    "BoardRead",
    "CardCreateRequest",
    "CardMoveRequest",
    "CardRead",
    "CardUpdateRequest",
    "ColumnCreateRequest",
    "ColumnRead",
    "ColumnWithCards",
    "CurrentUser",
    "DeletedOut",
    "ErrorBody",
    "FieldErrorOut",
    "HealthOut",
    "LoginRequest",
    "PublicUser",
    "RegisterRequest",
]
