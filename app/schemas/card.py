"""Request/response schemas for cards and card moves."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.envelope import ApiModel

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 10_000


class CardCreateRequest(ApiModel):
    """Body for POST /columns/{columnId}/cards. Cards are always appended."""

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)


class CardUpdateRequest(ApiModel):
    """Body for PUT /cards/{id}. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class CardMoveRequest(ApiModel):
    """
    Body for PATCH /cards/{id}/move.

    new_position is clamped into the destination's valid range by the service;
    omitting it appends the card to the destination column.
    """

    new_column_id: UUID
    new_position: int | None = None


class CardRead(ApiModel):
    id: str
    column_id: str
    title: str
    description: str | None = ""
    position: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
