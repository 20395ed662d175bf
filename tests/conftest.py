"""Pytest configuration and fixtures for the equipment dashboard.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. All imports use app.*.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.storage_cleanup import get_storage_cleanup
from app.core.config import get_settings
from app.infrastructure.external.storage import (
    get_active_driver,
    get_object_storage_client,
)
from app.infrastructure.persistence import database
from app.main import app

# Environment variables that change storage resolution; cleared for every test.
_STORAGE_ENV = (
    "FILE_STORAGE_DRIVER",
    "FILE_STORAGE_PATH",
    "FILE_STORAGE_ENDPOINT_URL",
    "FILE_STORAGE_BUCKET_NAME",
    "FILE_STORAGE_ACCESS_KEY_ID",
    "FILE_STORAGE_SECRET_ACCESS_KEY",
    "FILE_STORAGE_REGION",
    "FILE_SIGNED_URL_EXPIRES_SECONDS",
    "RAILWAY_ENVIRONMENT_NAME",
    "RAILWAY_STATIC_URL",
    "RAILWAY_PROJECT_ID",
)


def _clear_caches() -> None:
    get_settings.cache_clear()
    get_active_driver.cache_clear()
    get_object_storage_client.cache_clear()
    get_storage_cleanup.cache_clear()


@pytest.fixture(autouse=True)
def storage_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Isolate each test: no storage env, filesystem root under tmp_path, fresh caches."""
    for name in _STORAGE_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("FILE_STORAGE_PATH", str(tmp_path / "files"))
    _clear_caches()
    yield
    _clear_caches()
    app.dependency_overrides.clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (Postgres, migrated with `alembic upgrade head`).
    Skips when it is not configured. Run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
