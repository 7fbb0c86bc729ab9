"""Shared fixtures: a file-backed SQLite store and a coordinator bound to it."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

from roster.app.db.async_session import create_session_maker
from roster.app.db.init_db import create_all_tables
from roster.app.main import app
from roster.app.services.records import RecordCoordinator, get_record_coordinator


def sqlite_url_from_absolute_path(path: str) -> str:
    # SQLAlchemy expects 4 slashes for absolute paths. The path already starts
    # with '/', so strip it when appending after '////'.
    return f"sqlite+aiosqlite:////{path.lstrip('/')}"


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        sqlite_url_from_absolute_path(str(tmp_path / "roster_test.db"))
    )
    await create_all_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return create_session_maker(engine)


@pytest_asyncio.fixture
async def coordinator(session_maker):
    return RecordCoordinator(session_maker, timeout=5.0)


@pytest_asyncio.fixture
async def client(coordinator):
    """HTTP client for the app, wired to the test coordinator."""
    app.dependency_overrides[get_record_coordinator] = lambda: coordinator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
