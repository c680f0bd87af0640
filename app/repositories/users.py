"""User persistence for registration, login and token resolution."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models import User
from app.models.base import new_uuid


def create_user(session: Session, name: str, email: str, password_hash: str) -> User:
    user = User(id=new_uuid(), name=name, email=email, password_hash=password_hash)
    session.add(user)
    session.flush()
    return user


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.scalars(select(User).where(User.email == email)).first()


def get_user_by_id(session: Session, user_id: str) -> User | None:
    return session.get(User, user_id)
