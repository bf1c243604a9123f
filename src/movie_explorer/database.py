"""Database configuration with async SQLAlchemy support.

A single :class:`Database` is created at startup, stored on ``app.state`` and
handed to request handlers through the :func:`get_db` dependency.
"""

import logging
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

from movie_explorer.exceptions import DatabaseNotInitializedError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
    """Configure every new SQLite connection.

    Disables the driver's implicit transaction handling so SQLAlchemy controls
    BEGIN (required for savepoints), then turns on WAL and foreign keys.
    """
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_begin(conn: Any) -> None:
    conn.exec_driver_sql("BEGIN")


class Database:
    """Owns the engine and session factory for one SQLite database."""

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def in_memory(self) -> bool:
        """Whether this database lives only in memory (used by tests)."""
        return make_url(self.url).database in (None, "", ":memory:")

    @property
    def location(self) -> str:
        """Database location suitable for logs."""
        return ":memory:" if self.in_memory else str(make_url(self.url).database)

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseNotInitializedError()
        return self._engine

    async def connect(self) -> None:
        """Open the database, apply connection pragmas and create the schema.

        Raises:
            SQLAlchemyError, OSError: If the database cannot be opened. Callers
                are expected to let this abort application startup.
        """
        if self._engine is not None:
            return

        # Register all models on Base.metadata
        import movie_explorer.models  # noqa: F401

        if self.in_memory:
            engine_kwargs: dict[str, Any] = {"poolclass": StaticPool}
        else:
            Path(self.location).parent.mkdir(parents=True, exist_ok=True)
            engine_kwargs = {
                "poolclass": AsyncAdaptedQueuePool,
                "pool_size": 1,
                "max_overflow": 0,
            }

        engine = create_async_engine(self.url, echo=self.echo, **engine_kwargs)
        event.listen(engine.sync_engine, "connect", _on_connect)
        event.listen(engine.sync_engine, "begin", _on_begin)

        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError):
            logger.exception("Failed to initialize database at %s", self.location)
            await engine.dispose()
            raise

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("SQLite database connected at %s", self.location)

    def session(self) -> AsyncSession:
        """Create a new session bound to this database."""
        if self._session_factory is None:
            raise DatabaseNotInitializedError()
        return self._session_factory()

    async def close(self) -> None:
        """Dispose of the engine. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("SQLite database connection closed")


def get_database(request: Request) -> Database:
    """Return the database owned by the running application."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotInitializedError()
    return database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession]:
    """Dependency that provides an async database session.

    Yields a session and commits it after the request, rolling back on error.
    """
    async with get_database(request).session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
