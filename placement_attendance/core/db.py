"""
SQLAlchemy engine and session handling
"""

from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from placement_attendance.core.config import settings

Base = declarative_base()


class Database:
    """Process-wide database handle.

    The engine and session factory are created on first use and reused for the
    lifetime of the process. Nothing here disposes the engine implicitly; call
    ``dispose()`` at shutdown.
    """

    def __init__(self, url: str):
        self.url = url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            connect_args = {"check_same_thread": False} if self.url.startswith("sqlite") else {}
            self._engine = create_engine(self.url, connect_args=connect_args)
        return self._engine

    @property
    def SessionLocal(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        return self._session_factory

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        import placement_attendance.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None


database = Database(settings.DATABASE_URL)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session per request"""
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
