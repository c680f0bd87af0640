"""Unit tests for app.services.cards: move protocol shift sequence and transaction discipline."""

import unittest
from unittest.mock import MagicMock, patch

from app.core.errors import Conflict, Forbidden, InternalError, NotFound, ValidationFailed
from app.models import Board, BoardColumn, Card
from app.repositories.cards import CardWithOwner
from app.services.cards import CardService


def _card(column_id: str = "col-a", position: int = 2, **kwargs: object) -> Card:
    """Build a transient Card for tests."""
    defaults = {
        "id": "card-1",
        "title": "Task",
        "description": "desc",
    }
    defaults.update(kwargs)
    return Card(column_id=column_id, position=position, **defaults)


def _with_owner(
    card: Card | None = None,
    board_id: str = "board-1",
    owner_user_id: str = "owner-1",
) -> CardWithOwner:
    return CardWithOwner(
        card=card or _card(), board_id=board_id, owner_user_id=owner_user_id
    )


class MoveCardTestCase(unittest.TestCase):
    """Patches both repositories; the session factory hands out one mock session."""

    def setUp(self) -> None:
        cards_patcher = patch("app.services.cards.cards_repo")
        boards_patcher = patch("app.services.cards.boards_repo")
        self.cards_repo = cards_patcher.start()
        self.boards_repo = boards_patcher.start()
        self.addCleanup(cards_patcher.stop)
        self.addCleanup(boards_patcher.stop)

        self.session_factory = MagicMock()
        self.session = self.session_factory.return_value
        self.service = CardService(self.session_factory)

        self.given(dest_column_id="col-b", dest_count=3)

    def given(
        self,
        dest_column_id: str = "col-b",
        dest_board_id: str = "board-1",
        dest_count: int = 3,
        card: Card | None = None,
        final_position: int = 1,
    ) -> None:
        found = _with_owner(card)
        self.cards_repo.get_card_with_board.return_value = found
        self.boards_repo.get_column.return_value = BoardColumn(
            id=dest_column_id, board_id=dest_board_id, name="Dest", position=2
        )
        self.cards_repo.count_by_column.return_value = dest_count
        # First read happens under the column locks, the second is the result.
        self.cards_repo.get_card.side_effect = [
            found.card,
            _card(column_id=dest_column_id, position=final_position),
        ]

    def assert_committed(self) -> None:
        self.session.commit.assert_called_once()
        self.session.rollback.assert_not_called()
        self.session.close.assert_called_once()

    def assert_rolled_back(self) -> None:
        self.session.rollback.assert_called_once()
        self.session.commit.assert_not_called()
        self.session.close.assert_called_once()

    def assert_no_position_writes(self) -> None:
        self.cards_repo.shift_positions_up.assert_not_called()
        self.cards_repo.shift_positions_down.assert_not_called()
        self.cards_repo.update_card_column_and_position.assert_not_called()


class TestMoveWithinColumn(MoveCardTestCase):
    def test_move_up_shifts_source_then_opens_target(self) -> None:
        self.given(dest_column_id="col-a", dest_count=3, final_position=1)

        result = self.service.move_card("owner-1", "card-1", "col-a", 1)

        self.cards_repo.shift_positions_up.assert_called_once_with(self.session, "col-a", 2)
        self.cards_repo.shift_positions_down.assert_called_once_with(self.session, "col-a", 1)
        self.cards_repo.update_card_column_and_position.assert_called_once_with(
            self.session, "card-1", "col-a", 1
        )
        self.assert_committed()
        self.assertEqual(result.column_id, "col-a")
        self.assertEqual(result.position, 1)

    def test_same_slot_is_a_no_op_commit(self) -> None:
        self.given(dest_column_id="col-a", dest_count=3, final_position=2)

        result = self.service.move_card("owner-1", "card-1", "col-a", 2)

        self.assert_no_position_writes()
        self.assert_committed()
        self.assertEqual(result.position, 2)

    def test_past_the_end_lands_on_last_slot(self) -> None:
        # Card at 2 of 3: after removal there are 2 others, so slot 3 is the end.
        self.given(dest_column_id="col-a", dest_count=3, final_position=3)

        self.service.move_card("owner-1", "card-1", "col-a", 10)

        self.cards_repo.shift_positions_up.assert_called_once_with(self.session, "col-a", 2)
        self.cards_repo.shift_positions_down.assert_called_once_with(self.session, "col-a", 3)
        self.cards_repo.update_card_column_and_position.assert_called_once_with(
            self.session, "card-1", "col-a", 3
        )
        self.assert_committed()


class TestMoveAcrossColumns(MoveCardTestCase):
    def test_shift_up_source_and_shift_down_destination(self) -> None:
        self.given(dest_column_id="col-b", dest_count=3, final_position=2)

        result = self.service.move_card("owner-1", "card-1", "col-b", 2)

        self.cards_repo.shift_positions_up.assert_called_once_with(self.session, "col-a", 2)
        self.cards_repo.shift_positions_down.assert_called_once_with(self.session, "col-b", 2)
        self.cards_repo.update_card_column_and_position.assert_called_once_with(
            self.session, "card-1", "col-b", 2
        )
        self.assert_committed()
        self.assertEqual(result.column_id, "col-b")

    def test_omitted_position_appends(self) -> None:
        self.service.move_card("owner-1", "card-1", "col-b", None)

        self.cards_repo.shift_positions_down.assert_called_once_with(self.session, "col-b", 4)
        self.cards_repo.update_card_column_and_position.assert_called_once_with(
            self.session, "card-1", "col-b", 4
        )

    def test_locks_both_columns(self) -> None:
        self.service.move_card("owner-1", "card-1", "col-b", 1)
        self.boards_repo.lock_columns.assert_called_once_with(
            self.session, ["col-a", "col-b"]
        )


class TestMoveClamping(MoveCardTestCase):
    """Out-of-range or unusable positions are clamped, never rejected."""

    def _target_for(self, requested: object) -> int:
        self.cards_repo.reset_mock()
        self.given(dest_column_id="col-b", dest_count=3)
        self.service.move_card("owner-1", "card-1", "col-b", requested)
        args = self.cards_repo.update_card_column_and_position.call_args.args
        return args[3]

    def test_zero_maps_to_first_slot(self) -> None:
        self.assertEqual(self._target_for(0), 1)

    def test_negative_maps_to_first_slot(self) -> None:
        self.assertEqual(self._target_for(-7), 1)

    def test_non_numeric_maps_to_first_slot(self) -> None:
        self.assertEqual(self._target_for("abc"), 1)

    def test_above_end_maps_to_end(self) -> None:
        self.assertEqual(self._target_for(99), 4)

    def test_in_range_is_kept(self) -> None:
        self.assertEqual(self._target_for(3), 3)


class TestMoveFailures(MoveCardTestCase):
    def test_cross_board_move_is_rejected_without_writes(self) -> None:
        self.given(dest_column_id="col-x", dest_board_id="board-2")

        with self.assertRaises(ValidationFailed) as ctx:
            self.service.move_card("owner-1", "card-1", "col-x", 1)

        self.assertEqual(ctx.exception.error_type, "validation")
        self.assertEqual(ctx.exception.details[0].path, "newColumnId")
        self.assert_no_position_writes()
        self.assert_rolled_back()

    def test_non_owner_is_forbidden_and_rolled_back(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.move_card("intruder", "card-1", "col-b", 1)

        self.boards_repo.get_column.assert_not_called()
        self.assert_no_position_writes()
        self.assert_rolled_back()

    def test_missing_card_is_not_found(self) -> None:
        self.cards_repo.get_card_with_board.return_value = None

        with self.assertRaises(NotFound):
            self.service.move_card("owner-1", "card-1", "col-b", 1)
        self.assert_rolled_back()

    def test_missing_destination_is_not_found(self) -> None:
        self.boards_repo.get_column.return_value = None

        with self.assertRaises(NotFound):
            self.service.move_card("owner-1", "card-1", "col-b", 1)
        self.assert_no_position_writes()
        self.assert_rolled_back()

    def test_card_moved_away_before_lock_is_conflict(self) -> None:
        self.cards_repo.get_card.side_effect = [_card(column_id="col-z")]

        with self.assertRaises(Conflict):
            self.service.move_card("owner-1", "card-1", "col-b", 1)
        self.assert_no_position_writes()
        self.assert_rolled_back()

    def test_failure_mid_sequence_rolls_back_and_propagates(self) -> None:
        self.cards_repo.shift_positions_down.side_effect = RuntimeError("db down")

        with self.assertRaises(RuntimeError):
            self.service.move_card("owner-1", "card-1", "col-b", 1)

        self.cards_repo.shift_positions_up.assert_called_once()
        self.cards_repo.update_card_column_and_position.assert_not_called()
        self.assert_rolled_back()


class TestCreateUpdateDelete(unittest.TestCase):
    def setUp(self) -> None:
        cards_patcher = patch("app.services.cards.cards_repo")
        boards_patcher = patch("app.services.cards.boards_repo")
        self.cards_repo = cards_patcher.start()
        self.boards_repo = boards_patcher.start()
        self.addCleanup(cards_patcher.stop)
        self.addCleanup(boards_patcher.stop)

        self.session_factory = MagicMock()
        self.session = self.session_factory.return_value
        self.service = CardService(self.session_factory)

        self.boards_repo.get_column.return_value = BoardColumn(
            id="col-a", board_id="board-1", name="To Do", position=2
        )
        self.boards_repo.get_board.return_value = Board(
            id="board-1", name="Board", owner_user_id="owner-1"
        )
        self.cards_repo.get_card_with_board.return_value = _with_owner()
        self.cards_repo.get_card.return_value = _card()

    def test_create_appends_in_locked_column(self) -> None:
        self.cards_repo.create_card.return_value = _card(position=4, title="New")

        result = self.service.create_card("owner-1", "col-a", "New", "")

        self.boards_repo.lock_columns.assert_called_once_with(self.session, ["col-a"])
        self.cards_repo.create_card.assert_called_once_with(self.session, "col-a", "New", "")
        self.session.commit.assert_called_once()
        self.assertEqual(result.position, 4)

    def test_create_in_missing_column_is_not_found(self) -> None:
        self.boards_repo.get_column.return_value = None
        with self.assertRaises(NotFound):
            self.service.create_card("owner-1", "col-a", "New", "")
        self.cards_repo.create_card.assert_not_called()

    def test_create_by_non_owner_is_forbidden_before_any_write(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.create_card("intruder", "col-a", "New", "")
        self.cards_repo.create_card.assert_not_called()
        self.session.commit.assert_not_called()

    def test_update_without_fields_is_a_plain_read(self) -> None:
        result = self.service.update_card("owner-1", "card-1")

        self.cards_repo.update_card.assert_not_called()
        self.session.commit.assert_not_called()
        self.assertEqual(result.title, "Task")

    def test_update_leaves_position_alone(self) -> None:
        self.service.update_card("owner-1", "card-1", title="Renamed")

        self.cards_repo.update_card.assert_called_once_with(
            self.session, "card-1", title="Renamed", description=None
        )
        self.cards_repo.shift_positions_up.assert_not_called()
        self.cards_repo.shift_positions_down.assert_not_called()
        self.session.commit.assert_called_once()

    def test_delete_removes_then_compacts(self) -> None:
        self.assertTrue(self.service.delete_card("owner-1", "card-1"))

        self.cards_repo.delete_card.assert_called_once_with(self.session, "card-1")
        self.cards_repo.shift_positions_up.assert_called_once_with(self.session, "col-a", 2)
        self.session.commit.assert_called_once()

    def test_delete_failure_in_compaction_rolls_back(self) -> None:
        self.cards_repo.shift_positions_up.side_effect = InternalError("boom")

        with self.assertRaises(InternalError):
            self.service.delete_card("owner-1", "card-1")

        self.session.rollback.assert_called_once()
        self.session.commit.assert_not_called()

    def test_delete_of_card_moved_to_unlocked_column_is_conflict(self) -> None:
        self.cards_repo.get_card.return_value = _card(column_id="col-b", position=5)

        with self.assertRaises(Conflict):
            self.service.delete_card("owner-1", "card-1")

        self.boards_repo.lock_columns.assert_called_once_with(self.session, ["col-a"])
        self.cards_repo.delete_card.assert_not_called()
        self.cards_repo.shift_positions_up.assert_not_called()
        self.session.rollback.assert_called_once()
        self.session.commit.assert_not_called()

    def test_delete_by_non_owner_is_forbidden(self) -> None:
        with self.assertRaises(Forbidden):
            self.service.delete_card("intruder", "card-1")
        self.cards_repo.delete_card.assert_not_called()


if __name__ == "__main__":
    unittest.main()
