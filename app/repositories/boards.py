"""Board and column persistence: row reads/writes and column position shifts."""

from collections.abc import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from app.models import Board, BoardColumn, Card
from app.models.base import new_uuid


def create_board(session: Session, name: str, owner_user_id: str) -> Board:
    board = Board(id=new_uuid(), name=name, owner_user_id=owner_user_id)
    session.add(board)
    session.flush()
    return board


def get_board(session: Session, board_id: str) -> Board | None:
    return session.get(Board, board_id)


def list_boards_by_owner(session: Session, owner_user_id: str) -> list[Board]:
    """Boards owned by the user, newest first."""
    stmt = (
        select(Board)
        .where(Board.owner_user_id == owner_user_id)
        .order_by(Board.created_at.desc(), Board.id)
    )
    return list(session.scalars(stmt))


def delete_board(session: Session, board_id: str, owner_user_id: str) -> bool:
    """
    Delete the board and everything under it. Returns False if no board row
    matched (missing or not owned).
    """
    column_ids = select(BoardColumn.id).where(BoardColumn.board_id == board_id)
    session.execute(
        delete(Card)
        .where(Card.column_id.in_(column_ids))
        .execution_options(synchronize_session=False)
    )
    session.execute(
        delete(BoardColumn)
        .where(BoardColumn.board_id == board_id)
        .execution_options(synchronize_session=False)
    )
    result = session.execute(
        delete(Board)
        .where(Board.id == board_id, Board.owner_user_id == owner_user_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0


def create_columns(
    session: Session, board_id: str, columns: Sequence[tuple[str, int]]
) -> list[BoardColumn]:
    """Bulk insert (name, position) pairs for a fresh board."""
    rows = [
        BoardColumn(id=new_uuid(), board_id=board_id, name=name, position=position)
        for name, position in columns
    ]
    session.add_all(rows)
    session.flush()
    return rows


def create_column(
    session: Session, board_id: str, name: str, position: int
) -> BoardColumn:
    column = BoardColumn(
        id=new_uuid(), board_id=board_id, name=name, position=position
    )
    session.add(column)
    session.flush()
    return column


def get_column(session: Session, column_id: str) -> BoardColumn | None:
    return session.get(BoardColumn, column_id)


def count_columns(session: Session, board_id: str) -> int:
    stmt = select(func.count()).select_from(BoardColumn).where(
        BoardColumn.board_id == board_id
    )
    return session.scalar(stmt) or 0


def get_next_column_position(session: Session, board_id: str) -> int:
    """max(position) + 1 over the board's columns, or 1 for an empty board."""
    stmt = select(func.coalesce(func.max(BoardColumn.position), 0)).where(
        BoardColumn.board_id == board_id
    )
    return (session.scalar(stmt) or 0) + 1


def shift_columns_down(session: Session, board_id: str, from_position: int) -> None:
    """Open a gap at from_position: every column at or after it moves one slot later."""
    session.execute(
        update(BoardColumn)
        .where(
            BoardColumn.board_id == board_id,
            BoardColumn.position >= from_position,
        )
        .values(position=BoardColumn.position + 1)
    )


def lock_board(session: Session, board_id: str) -> None:
    """Row-lock the board so concurrent column inserts on it serialize."""
    session.execute(
        select(Board.id).where(Board.id == board_id).with_for_update()
    )


def lock_columns(session: Session, column_ids: Sequence[str]) -> None:
    """Row-lock columns in id order so concurrent card shifts on them serialize."""
    ids = sorted(set(column_ids))
    session.execute(
        select(BoardColumn.id)
        .where(BoardColumn.id.in_(ids))
        .order_by(BoardColumn.id)
        .with_for_update()
    )


def get_board_columns_with_cards(
    session: Session, board_id: str
) -> list[tuple[BoardColumn, list[Card]]]:
    """Columns of the board by position, each with its cards by position."""
    columns = list(
        session.scalars(
            select(BoardColumn)
            .where(BoardColumn.board_id == board_id)
            .order_by(BoardColumn.position)
        )
    )
    cards_by_column: dict[str, list[Card]] = {column.id: [] for column in columns}
    if columns:
        cards = session.scalars(
            select(Card)
            .where(Card.column_id.in_(list(cards_by_column)))
            .order_by(Card.column_id, Card.position)
        )
        for card in cards:
            cards_by_column[card.column_id].append(card)
    return [(column, cards_by_column[column.id]) for column in columns]
