"""Database initialization utilities."""

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from roster.app.core.logging import get_logger
from roster.app.db.async_session import get_async_engine
from roster.app.db.base import Base
from roster.app.db import models  # noqa: F401 - import to register models

logger = get_logger(__name__)


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """Drop all database tables.

    WARNING: This will delete all data. Use only in development and tests.
    """
    if engine is None:
        engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """Create the students, classes and grade_levels tables if missing."""
    if engine is None:
        engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def verify_connection(engine: AsyncEngine | None = None) -> bool:
    """Verify database connection is working.

    Returns:
        True if connection successful, False otherwise.
    """
    if engine is None:
        engine = get_async_engine()
    try:
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            return result.scalar() == 1
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database connection failed: {e}")
        return False
