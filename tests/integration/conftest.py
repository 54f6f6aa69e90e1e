"""Integration fixtures: the full application wired to an in-memory SQLite session."""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.config import Settings, get_settings
from registry_api.core.dependencies import get_async_session
from registry_api.main import create_app


@pytest.fixture
def registry_app(settings: Settings, async_session: AsyncSession) -> FastAPI:
    """The real application with its session and settings pointed at the test database."""
    with patch("registry_api.main.get_settings", return_value=settings):
        app = create_app()

    async def _session() -> AsyncGenerator[AsyncSession]:
        yield async_session

    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
async def client(registry_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=registry_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(token_for: Callable[[object], str]) -> Callable[[object], dict[str, str]]:
    """Bearer headers for a stored profile."""

    def _headers(profile: object) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(profile.id)}"}

    return _headers
