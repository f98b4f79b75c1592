"""
WordTally Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── fake_fetcher: In-memory PageFetcher (no network)
    ├── session_factory: Sessions on a fresh temporary SQLite database
    ├── test_client: HTTPX AsyncClient wired to the app and the above
    └── register: Helper that signs a user up and returns auth headers
"""

import os
import tempfile

# Settings are read at import time, so the environment is prepared before
# anything from wordtally is imported
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='wordtally_test_')}/app.db"
os.environ["TOKEN_SECRET"] = "test-token-secret-that-is-long-enough-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum work factor keeps signup/login fast
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Dict, List, Set  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from wordtally.database import Base, get_db_session  # noqa: E402
from wordtally.exceptions import UpstreamError  # noqa: E402
from wordtally.services.page_fetcher import PageFetcher  # noqa: E402


class FakePageFetcher(PageFetcher):
    """
    Serves page bodies from a dict.

    Unknown URLs (and URLs in `failing`) raise UpstreamError, like an
    unreachable host would.
    """

    def __init__(self, pages: Dict[str, str] = None):
        self.pages: Dict[str, str] = dict(pages or {})
        self.failing: Set[str] = set()
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failing or url not in self.pages:
            raise UpstreamError(context={"url": url})
        return self.pages[url]


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = record
        mock_db_session.execute.return_value = mock_result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def fake_fetcher():
    return FakePageFetcher(
        {
            "http://example.com": "hello world",
            "http://example.com/about": "<html><body><h1>About</h1><p>We count words.</p></body></html>",
            "http://example.com/blog": "<p>one two three four five</p>",
            "https://docs.python.org/3/": "<title>Python</title><p>Python documentation</p>",
            "http://empty.example.org": "",
        }
    )


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Fresh SQLite database per test, schema created from the models."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(session_factory, fake_fetcher, monkeypatch):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden to use the per-test database with the same
    commit/rollback behaviour; the URL service fetches from `fake_fetcher`.
    """
    from wordtally.main import app
    from wordtally.services.url_service import url_service

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    monkeypatch.setattr(url_service, "fetcher", fake_fetcher)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def register(test_client):
    """
    Sign up an account and return its Authorization headers.

    Usage:
        headers = await register("ada@example.com")
    """

    async def _register(email: str = "ada@example.com", password: str = "correct-horse") -> Dict[str, str]:
        response = await test_client.post(
            "/auth/signup",
            json={"displayName": email.split("@")[0], "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register
