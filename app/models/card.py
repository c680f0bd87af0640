"""ORM model for cards ordered within a column."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, func

from app.models.base import Base, new_uuid


class Card(Base):
    """
    Card in a column. Positions are dense within the column: {1, ..., n}.

    Moves and deletes shift neighbouring positions inside one transaction,
    so (column_id, position) is indexed but not declared unique.
    """

    __tablename__ = "cards"

    id = Column(String(36), primary_key=True, default=new_uuid)
    column_id = Column(
        String(36),
        ForeignKey("columns.id", ondelete="CASCADE"),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    position = Column(Integer, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_cards_column_id_position", "column_id", "position"),
    )
