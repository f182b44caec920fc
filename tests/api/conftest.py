"""Shared fixtures for API tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from comfy.infrastructure.config import settings
from comfy.infrastructure.database import get_session, get_session_factory
from comfy.infrastructure.uploads import UploadStorage, get_upload_storage
from comfy.main import app


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    """Directory uploaded images are written to."""
    return tmp_path / "uploads"


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    upload_dir: Path,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client without authentication, backed by the test database."""

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_upload_storage] = lambda: UploadStorage(upload_dir)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Get admin authentication headers."""
    return {"Authorization": f"Bearer {settings.admin_api_key}"}
