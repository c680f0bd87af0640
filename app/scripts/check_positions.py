"""
Audit board and card ordering. Run from project root or cron:

  python -m app.scripts.check_positions

Reports every board whose column positions, and every column whose card
positions, are not exactly 1..n. Exits 1 when any violation is found.
"""

import logging
import sys
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute, Session, sessionmaker

from app.core.database import SessionLocal, read_session
from app.models import BoardColumn, Card

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def find_gaps(positions: list[int]) -> bool:
    """True if positions are not exactly {1, ..., len(positions)}."""
    return sorted(positions) != list(range(1, len(positions) + 1))


def _violations(
    session: Session,
    parent_attr: InstrumentedAttribute,
    position_attr: InstrumentedAttribute,
) -> list[tuple[str, list[int]]]:
    by_parent: dict[str, list[int]] = defaultdict(list)
    for parent_id, position in session.execute(select(parent_attr, position_attr)):
        by_parent[parent_id].append(position)
    return [
        (parent_id, sorted(positions))
        for parent_id, positions in sorted(by_parent.items())
        if find_gaps(positions)
    ]


def check_positions(session_factory: sessionmaker) -> int:
    """Log every ordering violation; return how many were found."""
    with read_session(session_factory) as session:
        board_violations = _violations(
            session, BoardColumn.board_id, BoardColumn.position
        )
        column_violations = _violations(session, Card.column_id, Card.position)

    for board_id, positions in board_violations:
        logger.warning(
            "Board column positions not dense: board_id=%s positions=%s",
            board_id,
            positions,
        )
    for column_id, positions in column_violations:
        logger.warning(
            "Column card positions not dense: column_id=%s positions=%s",
            column_id,
            positions,
        )
    return len(board_violations) + len(column_violations)


def main() -> int:
    try:
        found = check_positions(SessionLocal)
    except Exception as e:
        logger.exception("Position check failed: %s", e)
        return 1
    logger.info("Position check completed: violations=%s", found)
    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main())
