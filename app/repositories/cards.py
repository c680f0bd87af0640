"""Card persistence: row reads/writes and card position shifts within a column."""

from typing import NamedTuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from app.core.errors import InternalError
from app.models import Board, BoardColumn, Card
from app.models.base import new_uuid


class CardWithOwner(NamedTuple):
    """A card plus the board it belongs to and that board's owner."""

    card: Card
    board_id: str
    owner_user_id: str


def get_next_position(session: Session, column_id: str) -> int:
    """max(position) + 1 over the column's cards, or 1 for an empty column."""
    stmt = select(func.coalesce(func.max(Card.position), 0)).where(
        Card.column_id == column_id
    )
    return (session.scalar(stmt) or 0) + 1


def create_card(
    session: Session, column_id: str, title: str, description: str | None
) -> Card:
    """Append a card at the end of the column."""
    position = get_next_position(session, column_id)
    card = Card(
        id=new_uuid(),
        column_id=column_id,
        title=title,
        description=description or "",
        position=position,
    )
    session.add(card)
    session.flush()
    session.refresh(card)
    return card


def update_card(
    session: Session,
    card_id: str,
    title: str | None = None,
    description: str | None = None,
) -> None:
    """Update title and/or description; position is never touched here."""
    values: dict[str, object] = {}
    if title is not None:
        values["title"] = title
    if description is not None:
        values["description"] = description
    if not values:
        return
    values["updated_at"] = func.now()
    result = session.execute(
        update(Card)
        .where(Card.id == card_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise InternalError("Failed to update card")


def delete_card(session: Session, card_id: str) -> None:
    result = session.execute(
        delete(Card)
        .where(Card.id == card_id)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise InternalError("Failed to delete card")


def get_card(session: Session, card_id: str) -> Card | None:
    stmt = (
        select(Card)
        .where(Card.id == card_id)
        .execution_options(populate_existing=True)
    )
    return session.scalars(stmt).first()


def get_card_with_board(session: Session, card_id: str) -> CardWithOwner | None:
    """Load the card joined through its column to the owning board."""
    stmt = (
        select(Card, BoardColumn.board_id, Board.owner_user_id)
        .join(BoardColumn, Card.column_id == BoardColumn.id)
        .join(Board, BoardColumn.board_id == Board.id)
        .where(Card.id == card_id)
        .execution_options(populate_existing=True)
    )
    row = session.execute(stmt).first()
    if row is None:
        return None
    card, board_id, owner_user_id = row
    return CardWithOwner(card=card, board_id=board_id, owner_user_id=owner_user_id)


def count_by_column(session: Session, column_id: str) -> int:
    stmt = select(func.count()).select_from(Card).where(Card.column_id == column_id)
    return session.scalar(stmt) or 0


def shift_positions_down(session: Session, column_id: str, from_position: int) -> None:
    """Open a gap at from_position: cards at or after it move one slot later."""
    session.execute(
        update(Card)
        .where(Card.column_id == column_id, Card.position >= from_position)
        .values(position=Card.position + 1)
        .execution_options(synchronize_session=False)
    )


def shift_positions_up(session: Session, column_id: str, from_position: int) -> None:
    """Close the gap at from_position: cards after it move one slot earlier."""
    session.execute(
        update(Card)
        .where(Card.column_id == column_id, Card.position > from_position)
        .values(position=Card.position - 1)
        .execution_options(synchronize_session=False)
    )


def update_card_column_and_position(
    session: Session, card_id: str, column_id: str, position: int
) -> None:
    result = session.execute(
        update(Card)
        .where(Card.id == card_id)
        .values(column_id=column_id, position=position, updated_at=func.now())
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise InternalError("Failed to move card")
