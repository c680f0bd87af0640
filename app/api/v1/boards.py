"""Board routes: create (with default columns), list, detail, delete, insert column."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from app.api.v1.auth import get_current_user
from app.core.database import get_session_factory
from app.schemas.auth import CurrentUser
from app.schemas.board import (
    BoardCreateRequest,
    BoardDetail,
    BoardRead,
    ColumnCreateRequest,
    ColumnRead,
)
from app.schemas.envelope import ApiResponse, DeletedOut
from app.services.boards import BoardService

router = APIRouter()


def get_board_service(
    session_factory: Annotated[sessionmaker, Depends(get_session_factory)],
) -> BoardService:
    return BoardService(session_factory)


@router.post("", response_model=ApiResponse[BoardDetail], status_code=201)
def create_board(
    body: BoardCreateRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> ApiResponse[BoardDetail]:
    """Create a board seeded with the default columns."""
    board = service.create_board(user.id, body.name)
    return ApiResponse[BoardDetail](data=board)


@router.get("", response_model=ApiResponse[list[BoardRead]])
def list_boards(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> ApiResponse[list[BoardRead]]:
    return ApiResponse[list[BoardRead]](data=service.list_boards(user.id))


@router.get("/{board_id}", response_model=ApiResponse[BoardDetail])
def get_board(
    board_id: UUID,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> ApiResponse[BoardDetail]:
    return ApiResponse[BoardDetail](data=service.get_board(user.id, str(board_id)))


@router.delete("/{board_id}", response_model=ApiResponse[DeletedOut])
def delete_board(
    board_id: UUID,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> ApiResponse[DeletedOut]:
    service.delete_board(user.id, str(board_id))
    return ApiResponse[DeletedOut](data=DeletedOut(deleted=True))


@router.post(
    "/{board_id}/columns",
    response_model=ApiResponse[ColumnRead],
    status_code=201,
)
def create_column(
    board_id: UUID,
    body: ColumnCreateRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[BoardService, Depends(get_board_service)],
) -> ApiResponse[ColumnRead]:
    """Insert a column at body.position (or at the end), shifting later columns."""
    column = service.create_column(user.id, str(board_id), body.name, body.position)
    return ApiResponse[ColumnRead](data=column)
