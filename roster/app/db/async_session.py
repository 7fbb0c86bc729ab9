"""Async database session management for SQLAlchemy 2.0+.

This module provides async database operations using PostgreSQL with asyncpg
in production and aiosqlite in development and tests.
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from roster.app.core.config import settings
from roster.app.core.logging import get_logger

logger = get_logger(__name__)

# Global session maker instance
_AsyncSessionLocal = None


@lru_cache(maxsize=1)
def get_async_engine(database_url: str | None = None) -> AsyncEngine:
    """Get or create the async database engine (thread-safe singleton).

    Args:
        database_url: Optional database URL. Uses settings if not provided.

    Returns:
        AsyncEngine instance
    """
    url = database_url or settings.database_url

    if "sqlite" in url.lower():
        engine = create_async_engine(
            url,
            echo=False,
            pool_size=settings.db_sqlite_pool_size,
            max_overflow=settings.db_sqlite_max_overflow,
        )
        logger.info(
            f"Created SQLite async engine (pool_size={settings.db_sqlite_pool_size})"
        )
    else:
        engine = create_async_engine(
            url,
            echo=False,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=settings.db_pool_pre_ping,
            connect_args={"command_timeout": settings.db_command_timeout},
        )
        logger.info(
            f"Created PostgreSQL async engine (pool_size={settings.db_pool_size}, "
            f"max_overflow={settings.db_max_overflow}, "
            f"pool_timeout={settings.db_pool_timeout}s)"
        )
    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session maker bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def get_async_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the async session maker.

    Returns:
        Async session maker configured with the async engine
    """
    global _AsyncSessionLocal
    if _AsyncSessionLocal is None:
        _AsyncSessionLocal = create_session_maker(get_async_engine())
    return _AsyncSessionLocal


async def close_async_engine() -> None:
    """Close the async engine.

    Call this on application shutdown to release database connections.
    """
    global _AsyncSessionLocal

    engine = get_async_engine()
    try:
        await engine.dispose()
        logger.debug("Async engine disposed successfully")
    except RuntimeError:
        # Event loop mismatch: the connections were already closed
        logger.debug("Engine dispose encountered RuntimeError (event loop mismatch)")

    # Clear cache to allow recreation on next startup
    get_async_engine.cache_clear()
    _AsyncSessionLocal = None
