"""
Async engine and session lifecycle.

The API uses the module-level ``db``; the migration CLI and the tests build
their own ``Database`` against an explicit URL.

Responsibility: Engine construction, session scopes and schema creation
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from ..config import settings

logger = logging.getLogger(__name__)


def engine_options(connection_string: str) -> Dict[str, Any]:
    """Pool arguments for the backend named by ``connection_string``."""
    if connection_string.startswith("sqlite"):
        # File database: a fresh connection per checkout
        return {"poolclass": NullPool}

    return {
        "pool_size": settings.db.pool_size,
        "max_overflow": settings.db.max_overflow,
        "pool_timeout": settings.db.pool_timeout,
        "pool_recycle": settings.db.pool_recycle,
        "pool_pre_ping": True,
    }


def use_sqlalchemy_transactions(engine: AsyncEngine) -> None:
    """
    Make SQLAlchemy, not the sqlite3 driver, start transactions.

    Needed for SAVEPOINT, which the importer opens per record.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """
    Owns one engine and hands out sessions.

    Example:
        database = Database("sqlite+aiosqlite:///portal.db")
        await database.initialize()
        await database.create_tables()

        async with database.session() as session:
            members = await CouncilMemberRepository(session).list_all()

        await database.close()
    """

    def __init__(self, url: Optional[str] = None):
        """
        Args:
            url: Connection string; the configured database when omitted
        """
        self.url = url
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self.engine

    async def initialize(self) -> None:
        """Create the engine and session factory; a second call is a no-op."""
        if self.is_initialized:
            logger.warning("Database already initialized")
            return

        self.url = self.url or settings.db.connection_string
        backend = self.url.split("://", 1)[0]

        self.engine = create_async_engine(
            self.url,
            echo=settings.db.echo,
            echo_pool=settings.db.echo_pool,
            **engine_options(self.url)
        )
        if backend.startswith("sqlite"):
            use_sqlalchemy_transactions(self.engine)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"Database ready ({backend})")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scope: commit whatever is pending on exit, roll back on error.

        Yields:
            AsyncSession bound to this database
        """
        self._require_engine()
        session = self.session_factory()

        try:
            yield session
            if session.in_transaction():
                await session.commit()
        except Exception as e:
            logger.error(f"Session error, rolling back: {e}")
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create any missing tables from the ORM metadata."""
        from .models import Base

        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Ensured {len(Base.metadata.tables)} tables")

    async def close(self) -> None:
        """Dispose of the engine; safe to call when never initialized."""
        if self.engine is None:
            return

        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database closed")


# Global database instance
db = Database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session from the global database."""
    if not db.is_initialized:
        await db.initialize()
    async with db.session() as session:
        yield session
