"""Database handle and session management.

The engine is owned by a ``Database`` object created once in ``create_app``
and stored on ``app.state``. Nothing in the service layer reaches for a
module-level engine; sessions are handed in by the ``get_db`` dependency.
"""

from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Create base class for models
Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """Process-wide database handle: engine plus session factory."""

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10, pool_recycle: int = 1800):
        self.url = url
        self.engine = self._create_engine(url, pool_size, max_overflow, pool_recycle)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def is_postgresql(self) -> bool:
        return self.url.startswith("postgresql")

    @staticmethod
    def _create_engine(url: str, pool_size: int, max_overflow: int, pool_recycle: int) -> Engine:
        if not url.startswith("sqlite"):
            return create_engine(
                url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=pool_recycle,
                # Detects stale connections before use.
                pool_pre_ping=True,
            )

        kwargs = {"connect_args": {"check_same_thread": False}}
        if _is_memory_sqlite(url):
            # One shared connection, otherwise every checkout sees an empty database.
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, **kwargs)

        # SQLite defaults foreign_keys to OFF.
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    def create_all(self) -> None:
        """Create any missing tables. Safe to call on every startup."""
        from . import models  # noqa: F401  (registers mappers on Base)

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for FastAPI routes to get a database session.

    Rolls back the transaction on unhandled exceptions so that the
    connection is returned to the pool in a clean state.
    """
    db = request.app.state.db.session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
