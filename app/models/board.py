"""ORM models for boards and their ordered columns."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, func

from app.models.base import Base, new_uuid


class Board(Base):
    """
    Board owned by exactly one user.

    owner_user_id is an authorization back-reference only; columns and cards
    resolve their owner through the board.
    """

    __tablename__ = "boards"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(255), nullable=False)
    owner_user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class BoardColumn(Base):
    """
    Column of a board. Positions are dense within the board: {1, ..., k}.
    """

    __tablename__ = "columns"

    id = Column(String(36), primary_key=True, default=new_uuid)
    board_id = Column(
        String(36),
        ForeignKey("boards.id", ondelete="CASCADE"),
        nullable=False,
    )
    name = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_columns_board_id_position", "board_id", "position"),
    )
