"""Registration and login: bcrypt-hashed credentials, JWT access tokens."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from app.core.database import UnitOfWork, read_session
from app.core.errors import Conflict, Unauthorized
from app.core.security import create_access_token, hash_password, verify_password
from app.repositories import users as users_repo
from app.schemas.auth import AuthResult, PublicUser

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create the user and return it with an access token. Conflict on duplicate email."""
        email = normalize_email(email)
        with read_session(self._session_factory) as session:
            if users_repo.get_user_by_email(session, email) is not None:
                raise Conflict("Email already registered")

        password_hash = hash_password(password)
        try:
            with UnitOfWork(self._session_factory) as uow:
                user = users_repo.create_user(uow.session, name, email, password_hash)
                uow.commit()
                public_user = PublicUser.model_validate(user)
        except IntegrityError as e:
            # Concurrent registration with the same email hit the unique index.
            raise Conflict("Email already registered") from e

        logger.info("User registered", extra={"user_id": public_user.id})
        return _auth_result(public_user)

    def login(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)
        with read_session(self._session_factory) as session:
            user = users_repo.get_user_by_email(session, email)
            if user is None or not verify_password(password, user.password_hash):
                raise Unauthorized("Invalid credentials")
            public_user = PublicUser.model_validate(user)
        return _auth_result(public_user)


def normalize_email(email: str) -> str:
    """Emails are stored and matched lowercased."""
    return email.strip().lower()


def _auth_result(user: PublicUser) -> AuthResult:
    token = create_access_token(sub=user.id, email=user.email)
    return AuthResult(user=user, access_token=token)
