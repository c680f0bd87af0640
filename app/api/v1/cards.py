"""Card routes: create in a column, update, delete, move."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import sessionmaker

from app.api.v1.auth import get_current_user
from app.core.database import get_session_factory
from app.schemas.auth import CurrentUser
from app.schemas.card import (
    CardCreateRequest,
    CardMoveRequest,
    CardRead,
    CardUpdateRequest,
)
from app.schemas.envelope import ApiResponse, DeletedOut
from app.services.cards import CardService

router = APIRouter()


def get_card_service(
    session_factory: Annotated[sessionmaker, Depends(get_session_factory)],
) -> CardService:
    return CardService(session_factory)


@router.post(
    "/columns/{column_id}/cards",
    response_model=ApiResponse[CardRead],
    status_code=201,
)
def create_card(
    column_id: UUID,
    body: CardCreateRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CardService, Depends(get_card_service)],
) -> ApiResponse[CardRead]:
    """Append a card to the column."""
    card = service.create_card(user.id, str(column_id), body.title, body.description)
    return ApiResponse[CardRead](data=card)


@router.put("/cards/{card_id}", response_model=ApiResponse[CardRead])
def update_card(
    card_id: UUID,
    body: CardUpdateRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CardService, Depends(get_card_service)],
) -> ApiResponse[CardRead]:
    card = service.update_card(
        user.id, str(card_id), title=body.title, description=body.description
    )
    return ApiResponse[CardRead](data=card)


@router.delete("/cards/{card_id}", response_model=ApiResponse[DeletedOut])
def delete_card(
    card_id: UUID,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CardService, Depends(get_card_service)],
) -> ApiResponse[DeletedOut]:
    service.delete_card(user.id, str(card_id))
    return ApiResponse[DeletedOut](data=DeletedOut(deleted=True))


@router.patch("/cards/{card_id}/move", response_model=ApiResponse[CardRead])
def move_card(
    card_id: UUID,
    body: CardMoveRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    service: Annotated[CardService, Depends(get_card_service)],
) -> ApiResponse[CardRead]:
    """
    Move a card within its column or to another column of the same board.
    Omit newPosition to append; out-of-range positions are clamped.
    """
    card = service.move_card(
        user.id, str(card_id), str(body.new_column_id), body.new_position
    )
    return ApiResponse[CardRead](data=card)
