"""Board service: board creation with default columns, column insertion, board reads and deletion."""

import logging

from sqlalchemy.orm import sessionmaker

from app.core.database import UnitOfWork, read_session
from app.core.errors import InternalError, NotFound
from app.repositories import boards as boards_repo
from app.schemas.board import BoardDetail, BoardRead, ColumnRead, ColumnWithCards
from app.schemas.card import CardRead
from app.services.ownership import assert_ownership
from app.services.positions import clamp_position, is_positive_int

logger = logging.getLogger(__name__)

# Seeded on every new board, in this order, at positions 1..5.
DEFAULT_COLUMNS: tuple[tuple[str, int], ...] = (
    ("Backlog", 1),
    ("To Do", 2),
    ("In Progress", 3),
    ("Done", 4),
    ("Extra", 5),
)


class BoardService:
    """Orchestrates board and column mutations, one transaction per operation."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def create_board(self, owner_id: str, name: str) -> BoardDetail:
        """Insert the board and its default columns atomically."""
        with UnitOfWork(self._session_factory) as uow:
            board = boards_repo.create_board(uow.session, name, owner_id)
            columns = boards_repo.create_columns(uow.session, board.id, DEFAULT_COLUMNS)
            uow.commit()
            logger.info(
                "Board created",
                extra={"board_id": board.id, "owner_user_id": owner_id},
            )
            return BoardDetail(
                id=board.id,
                name=board.name,
                created_at=board.created_at,
                columns=[ColumnWithCards.model_validate(c) for c in columns],
            )

    def create_column(
        self,
        owner_id: str,
        board_id: str,
        name: str,
        position: int | None = None,
    ) -> ColumnRead:
        """
        Insert a column at the requested slot, shifting later columns down.

        A positive position is clamped to [1, count + 1]; anything else appends.
        """
        with read_session(self._session_factory) as session:
            board = boards_repo.get_board(session, board_id)
            if board is None:
                raise NotFound("Board not found")
            assert_ownership(board.owner_user_id, owner_id)

        with UnitOfWork(self._session_factory) as uow:
            boards_repo.lock_board(uow.session, board_id)
            if is_positive_int(position):
                end = boards_repo.count_columns(uow.session, board_id) + 1
                target = clamp_position(position, 1, end, fallback=end)
            else:
                target = boards_repo.get_next_column_position(uow.session, board_id)

            boards_repo.shift_columns_down(uow.session, board_id, target)
            column = boards_repo.create_column(uow.session, board_id, name, target)
            uow.commit()
            logger.info(
                "Column created",
                extra={"board_id": board_id, "column_id": column.id, "position": target},
            )
            return ColumnRead.model_validate(column)

    def list_boards(self, owner_id: str) -> list[BoardRead]:
        with read_session(self._session_factory) as session:
            boards = boards_repo.list_boards_by_owner(session, owner_id)
            return [BoardRead.model_validate(b) for b in boards]

    def get_board(self, owner_id: str, board_id: str) -> BoardDetail:
        """Board with columns and cards, both ordered by position."""
        with read_session(self._session_factory) as session:
            board = boards_repo.get_board(session, board_id)
            if board is None:
                raise NotFound("Board not found")
            assert_ownership(board.owner_user_id, owner_id)

            rows = boards_repo.get_board_columns_with_cards(session, board_id)
            columns = [
                ColumnWithCards(
                    id=column.id,
                    board_id=column.board_id,
                    name=column.name,
                    position=column.position,
                    cards=[CardRead.model_validate(card) for card in cards],
                )
                for column, cards in rows
            ]
            return BoardDetail(
                id=board.id,
                name=board.name,
                created_at=board.created_at,
                columns=columns,
            )

    def delete_board(self, owner_id: str, board_id: str) -> bool:
        with read_session(self._session_factory) as session:
            board = boards_repo.get_board(session, board_id)
            if board is None:
                raise NotFound("Board not found")
            assert_ownership(board.owner_user_id, owner_id)

        with UnitOfWork(self._session_factory) as uow:
            deleted = boards_repo.delete_board(uow.session, board_id, owner_id)
            if not deleted:
                raise InternalError("Failed to delete board")
            uow.commit()
        logger.info("Board deleted", extra={"board_id": board_id})
        return True
