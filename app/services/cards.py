"""
Card service: create, update, delete and the move protocol.

Card positions are dense within a column ({1, ..., n}). Every operation that
changes positions runs in one unit of work and leaves the column dense on
commit; intermediate states exist only inside the uncommitted transaction.
"""

import logging

from sqlalchemy.orm import Session, sessionmaker

from app.core.database import UnitOfWork, read_session
from app.core.errors import Conflict, FieldError, NotFound, ValidationFailed
from app.repositories import boards as boards_repo
from app.repositories import cards as cards_repo
from app.schemas.card import CardRead
from app.services.ownership import assert_ownership
from app.services.positions import clamp_position

logger = logging.getLogger(__name__)


class CardService:
    """Orchestrates card mutations against an injected session factory."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def create_card(
        self,
        user_id: str,
        column_id: str,
        title: str,
        description: str | None = "",
    ) -> CardRead:
        """Append a card to the end of the column."""
        with read_session(self._session_factory) as session:
            column = boards_repo.get_column(session, column_id)
            if column is None:
                raise NotFound("Column not found")
            board = boards_repo.get_board(session, column.board_id)
            if board is None:
                raise NotFound("Board not found")
            assert_ownership(board.owner_user_id, user_id)

        with UnitOfWork(self._session_factory) as uow:
            boards_repo.lock_columns(uow.session, [column_id])
            card = cards_repo.create_card(uow.session, column_id, title, description)
            uow.commit()
            logger.info(
                "Card created",
                extra={"card_id": card.id, "column_id": column_id, "position": card.position},
            )
            return CardRead.model_validate(card)

    def update_card(
        self,
        user_id: str,
        card_id: str,
        title: str | None = None,
        description: str | None = None,
    ) -> CardRead:
        """Update title and/or description. With neither supplied this is a plain read."""
        with read_session(self._session_factory) as session:
            found = cards_repo.get_card_with_board(session, card_id)
            if found is None:
                raise NotFound("Card not found")
            assert_ownership(found.owner_user_id, user_id)
            if title is None and description is None:
                return CardRead.model_validate(found.card)

        with UnitOfWork(self._session_factory) as uow:
            cards_repo.update_card(
                uow.session, card_id, title=title, description=description
            )
            uow.commit()
            return _fetch_card(uow.session, card_id)

    def delete_card(self, user_id: str, card_id: str) -> bool:
        """Remove the card and close the gap it leaves in its column."""
        with read_session(self._session_factory) as session:
            found = cards_repo.get_card_with_board(session, card_id)
            if found is None:
                raise NotFound("Card not found")
            assert_ownership(found.owner_user_id, user_id)
            column_id = found.card.column_id

        with UnitOfWork(self._session_factory) as uow:
            boards_repo.lock_columns(uow.session, [column_id])
            # Re-read under the lock; a concurrent move may have changed the slot.
            card = cards_repo.get_card(uow.session, card_id)
            if card is None:
                raise NotFound("Card not found")
            if str(card.column_id) != str(column_id):
                raise Conflict("Card was moved concurrently, retry the request")
            column_id, position = card.column_id, card.position

            cards_repo.delete_card(uow.session, card_id)
            cards_repo.shift_positions_up(uow.session, column_id, position)
            uow.commit()
        logger.info(
            "Card deleted",
            extra={"card_id": card_id, "column_id": column_id, "position": position},
        )
        return True

    def move_card(
        self,
        user_id: str,
        card_id: str,
        new_column_id: str,
        new_position: object = None,
    ) -> CardRead:
        """
        Move a card to new_position in new_column_id (same or another column of
        the same board).

        The requested position is clamped into [1, destination count + 1];
        omitting it appends. Moving a card onto its own slot commits without
        writing. Every failure, including lookups and authorization, rolls the
        transaction back before propagating.
        """
        with UnitOfWork(self._session_factory) as uow:
            session = uow.session

            found = cards_repo.get_card_with_board(session, card_id)
            if found is None:
                raise NotFound("Card not found")
            assert_ownership(found.owner_user_id, user_id)

            dest_column = boards_repo.get_column(session, new_column_id)
            if dest_column is None:
                raise NotFound("Destination column not found")
            if str(dest_column.board_id) != str(found.board_id):
                raise ValidationFailed(
                    [
                        FieldError(
                            message="Card and column must belong to the same board",
                            path="newColumnId",
                            type="any.invalid",
                        )
                    ]
                )

            source_column_id = found.card.column_id
            boards_repo.lock_columns(session, [source_column_id, new_column_id])
            # Re-read under the locks; a concurrent move may have shifted the card.
            card = cards_repo.get_card(session, card_id)
            if card is None:
                raise NotFound("Card not found")
            if str(card.column_id) != str(source_column_id):
                raise Conflict("Card was moved concurrently, retry the request")
            old_position = card.position

            dest_count = cards_repo.count_by_column(session, new_column_id)
            end_position = dest_count + 1
            target = clamp_position(new_position, 1, end_position, fallback=end_position)

            same_column = str(source_column_id) == str(new_column_id)

            if same_column and target == old_position:
                uow.commit()
                return _fetch_card(session, card_id)

            if same_column:
                cards_repo.shift_positions_up(session, source_column_id, old_position)
                # The moved row is still counted but no longer holds a slot, so the
                # last valid slot is the number of other cards plus one.
                others = cards_repo.count_by_column(session, new_column_id) - 1
                end_after_removal = others + 1
                target = clamp_position(
                    target, 1, end_after_removal, fallback=end_after_removal
                )
                cards_repo.shift_positions_down(session, new_column_id, target)
                cards_repo.update_card_column_and_position(
                    session, card_id, new_column_id, target
                )
            else:
                cards_repo.shift_positions_up(session, source_column_id, old_position)
                cards_repo.shift_positions_down(session, new_column_id, target)
                cards_repo.update_card_column_and_position(
                    session, card_id, new_column_id, target
                )

            uow.commit()
            logger.info(
                "Card moved",
                extra={
                    "card_id": card_id,
                    "from_column_id": source_column_id,
                    "from_position": old_position,
                    "to_column_id": new_column_id,
                    "to_position": target,
                },
            )
            return _fetch_card(session, card_id)


def _fetch_card(session: Session, card_id: str) -> CardRead:
    card = cards_repo.get_card(session, card_id)
    if card is None:
        raise NotFound("Card not found")
    return CardRead.model_validate(card)
