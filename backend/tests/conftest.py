"""
Vitrine Backend: Test Configuration (conftest.py)
===================================================

Shared pytest fixtures for the whole suite.

Environment:
    Settings are read once at import time, so the variables below are set
    before anything from `vitrine` is imported. Tests run against a SQLite
    file (aiosqlite) and temporary site/public directories.

Fixtures:
    ├── mock_db_session:  AsyncMock session for service unit tests
    ├── db_tables:        creates every table before a test, drops it after
    ├── db_session:       a real session on the test database
    ├── site_files:       index.html, admin.html, about.html, style.css
    ├── test_client:      HTTPX AsyncClient wired to the app (tables ready)
    ├── admin_token:      bearer token for a seeded admin user
    └── auth_headers:     {"Authorization": "Bearer <admin_token>"}
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="vitrine_test_"))
_SITE_ROOT = _TEST_ROOT / "site"
_PUBLIC_ROOT = _TEST_ROOT / "public"
_SITE_ROOT.mkdir()
_PUBLIC_ROOT.mkdir()

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["SITE_ROOT"] = str(_SITE_ROOT)
os.environ["PUBLIC_ROOT"] = str(_PUBLIC_ROOT)
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_REQUESTS"] = "100000"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from vitrine import models  # noqa: E402,F401
from vitrine.database import Base, async_session_factory, engine  # noqa: E402

SITE_PAGES = {
    "index.html": "<html><body>home</body></html>",
    "admin.html": "<html><body>admin dashboard</body></html>",
    "about.html": "<html><body>about us</body></html>",
    "style.css": "body { color: #222; }",
}


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that stands in for AsyncSession.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = [row]
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    session.add_all = MagicMock()
    return session


@pytest.fixture
def sample_image_bytes():
    """Minimal PNG signature plus a few bytes; the content is never decoded."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def public_root():
    return _PUBLIC_ROOT


@pytest.fixture
def site_files():
    for name, content in SITE_PAGES.items():
        (_SITE_ROOT / name).write_text(content)
    yield _SITE_ROOT
    for child in _SITE_ROOT.iterdir():
        if child.is_file():
            child.unlink()


@pytest_asyncio.fixture
async def db_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Each test runs on its own event loop; drop pooled connections
    await engine.dispose()
    shutil.rmtree(_PUBLIC_ROOT / "uploads", ignore_errors=True)


@pytest_asyncio.fixture
async def db_session(db_tables):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from vitrine.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_token(test_client):
    response = await test_client.post("/api/auth/seed")
    assert response.status_code == 201
    response = await test_client.post(
        "/api/auth/login", json={"username": "admin", "password": "admin123"}
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
