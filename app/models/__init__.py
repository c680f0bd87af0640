"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.board import Board, BoardColumn
from app.models.card import Card
from app.models.user import User

__all__ = ["Base", "Board", "BoardColumn", "Card", "User"]
