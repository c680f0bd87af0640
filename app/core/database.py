"""PostgreSQL connection pool, sessions and the transactional unit of work."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from types import TracebackType

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT_SEC,
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class UnitOfWork:
    """
    One transaction on one pooled connection for a multi-step mutation.

    Every repository call inside the block receives ``uow.session`` so all reads
    and writes see each other's uncommitted effects. Leaving the block with an
    exception rolls back; leaving it in any way releases the connection.
    Changes not explicitly committed are discarded on close.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active")
        return self._session

    def __enter__(self) -> "UnitOfWork":
        self._session = self._session_factory()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        session = self._session
        self._session = None
        if session is None:
            return
        try:
            if exc_type is not None:
                logger.warning(
                    "Rolling back transaction after %s", exc_type.__name__
                )
                session.rollback()
        finally:
            session.close()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


@contextmanager
def read_session(session_factory: sessionmaker) -> Iterator[Session]:
    """Short-lived session for plain reads; no transaction is held across steps."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def get_session_factory() -> sessionmaker:
    """Dependency that provides the session factory services open work against."""
    return SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def dispose_engine() -> None:
    """Drain the connection pool (called on application shutdown)."""
    engine.dispose()
