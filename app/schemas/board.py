"""Request/response schemas for boards and columns."""

from datetime import datetime

from pydantic import Field, PositiveInt

from app.schemas.card import CardRead
from app.schemas.envelope import ApiModel

BOARD_NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 255


class BoardCreateRequest(ApiModel):
    """Body for POST /boards."""

    name: str = Field(..., min_length=BOARD_NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)


class ColumnCreateRequest(ApiModel):
    """Body for POST /boards/{id}/columns. Omitted position appends the column."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    position: PositiveInt | None = Field(
        default=None,
        description="1-based slot for the new column; clamped to the end of the board.",
    )


class BoardRead(ApiModel):
    id: str
    name: str
    created_at: datetime | None = None


class ColumnRead(ApiModel):
    id: str
    board_id: str
    name: str
    position: int


class ColumnWithCards(ColumnRead):
    cards: list[CardRead] = Field(default_factory=list)


class BoardDetail(BoardRead):
    """Board with its columns and their cards, each ordered by position."""

    columns: list[ColumnWithCards] = Field(default_factory=list)
