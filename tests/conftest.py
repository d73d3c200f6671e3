"""
Bookmarks API — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for access-layer unit tests
    ├── db_engine / session_factory: In-memory SQLite with the real schema
    ├── app: FastAPI instance whose get_db_session uses the in-memory database
    ├── client: HTTPX AsyncClient sending the valid bearer token
    ├── anonymous_client: HTTPX AsyncClient without any Authorization header
    ├── bookmarks_array / malicious_bookmark / valid_bookmark: payload data
    ├── seeded_bookmarks: bookmarks_array inserted into the database
    └── insert_bookmarks: helper to insert arbitrary rows (e.g. malicious ones)
"""

import os

# Override settings BEFORE any bookmarks_api import: the settings singleton
# and the module-level engine are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["API_TOKEN"] = "test-api-token"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict, List  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from bookmarks_api.database import Base, get_db_session  # noqa: E402
from bookmarks_api.main import create_app  # noqa: E402
from bookmarks_api.models.bookmark import Bookmark  # noqa: E402

API_TOKEN = os.environ["API_TOKEN"]
AUTH_HEADERS = {"Authorization": f"Bearer {API_TOKEN}"}
BASE_URL = "http://test"


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
            result = await bookmark_service.get_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database & HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A private in-memory SQLite database with the bookmarks schema.

    StaticPool keeps one connection alive, so every session (and every HTTP
    request in a test) sees the same in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def app(session_factory):
    """A fresh application whose requests use the in-memory database."""
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def client(app):
    """HTTPX client that sends the valid bearer token on every request."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL, headers=AUTH_HEADERS) as c:
        yield c


@pytest_asyncio.fixture
async def anonymous_client(app):
    """HTTPX client without an Authorization header."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as c:
        yield c


# ══════════════════════════════════════════════════════════════════════════
# Bookmark Data
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def bookmarks_array() -> List[Dict]:
    return [
        {
            "id": 1,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Search engine",
            "rating": 4,
        },
        {
            "id": 2,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Coding bootcamp",
            "rating": 5,
        },
        {
            "id": 3,
            "title": "Bing",
            "url": "https://www.bing.com",
            "description": "I mean.. if google is down you can use this I guess",
            "rating": 2,
        },
    ]


@pytest.fixture
def malicious_bookmark() -> Dict:
    """A bookmark carrying script payloads; the id is ignored on create."""
    return {
        "id": 18,
        "title": 'Ur haxxed! <script>alert("xss");</script>',
        "url": "https://www.ninjaz4lyfe.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "rating": 5,
    }


@pytest.fixture
def sanitized_malicious_fields() -> Dict:
    """What the API must return for malicious_bookmark."""
    return {
        "title": 'Ur haxxed! &lt;script&gt;alert("xss");&lt;/script&gt;',
        "url": "https://www.ninjaz4lyfe.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            "But not <strong>all</strong> bad."
        ),
        "rating": 5,
    }


@pytest.fixture
def valid_bookmark() -> Dict:
    return {
        "title": "Firefox",
        "url": "https://www.firefox.com",
        "description": "Less ads than Chrome",
        "rating": 5,
    }


async def insert_rows(session_factory, rows: List[Dict]) -> None:
    """Write rows straight into the table, bypassing the API."""
    async with session_factory() as session:
        session.add_all([Bookmark(**row) for row in rows])
        await session.commit()


@pytest_asyncio.fixture
async def seeded_bookmarks(session_factory, bookmarks_array) -> List[Dict]:
    """The seed dataset, inserted for the duration of one test."""
    await insert_rows(session_factory, bookmarks_array)
    return bookmarks_array


@pytest.fixture
def insert_bookmarks(session_factory):
    """Async helper fixture: `await insert_bookmarks([row, ...])`."""
    async def _insert(rows: List[Dict]) -> None:
        await insert_rows(session_factory, rows)
    return _insert
