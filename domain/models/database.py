"""
Database configuration and session management.

A ``Database`` is built once at process startup from ``Settings`` and passed
down to every repository and to the transaction coordinator. Repositories
never reach for a module-level engine.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Generator, Optional

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import Settings

logger = logging.getLogger("listly.database")

# Create SQLAlchemy Base
Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE clauses unless this pragma is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine described by ``settings``."""
    kwargs = {"echo": settings.db_echo, "future": True}
    if settings.db_isolation_level:
        kwargs["isolation_level"] = settings.db_isolation_level

    if settings.is_sqlite():
        kwargs["connect_args"] = {"check_same_thread": False}
        if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = settings.db_pool_pre_ping

    engine = create_engine(settings.database_url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


class Database:
    """Top-level data-store handle.

    Each ``session_scope`` block runs in its own short transaction that is
    committed on success and rolled back on error.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, expire_on_commit=False, future=True
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = build_engine(settings)
        logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
        return cls(engine)

    @property
    def closed(self) -> bool:
        return self._closed

    def create_session(self) -> Session:
        """Return a new session bound to this database."""
        if self._closed:
            raise RuntimeError("Database handle has been closed")
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Yield a session with automatic commit/rollback."""
        session = self.create_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def init_schema(self) -> None:
        """Create all tables"""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created: %s", ", ".join(sorted(inspect(self.engine).get_table_names())))

    def drop_schema(self) -> None:
        Base.metadata.drop_all(bind=self.engine)
        logger.info("Database tables dropped")

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        if self._closed:
            return
        self.engine.dispose()
        self._closed = True
        logger.info("Database engine disposed")


class SessionHandle:
    """Transaction-scoped data-store handle.

    Wraps a session whose transaction is owned by someone else (the
    transaction coordinator). ``session_scope`` yields that same session and
    only flushes, so writes surface constraint errors immediately while the
    commit/rollback decision stays with the owner.
    """

    def __init__(self, session: Session, guard: Optional[Callable[[], None]] = None):
        self.session = session
        self._guard = guard

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        if self._guard is not None:
            self._guard()
        yield self.session
        self.session.flush()
