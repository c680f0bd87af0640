"""ORM model for application users (registration and JWT authentication)."""

from sqlalchemy import Column, DateTime, String, func

from app.models.base import Base, new_uuid


class User(Base):
    """User account; owns boards. Immutable after registration."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
