"""Tests for the database engine and session management module."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import text

import registry_api.core.database as db_module
from registry_api.core.database import (
    dispose_engine,
    get_engine,
    get_session_factory,
    init_engine,
    standalone_session,
)


@pytest.fixture(autouse=True)
def _reset_engine_state() -> Iterator[None]:
    yield
    db_module._engine = None
    db_module._session_factory = None


class TestGetEngine:
    """Tests for get_engine."""

    def test_raises_when_not_initialized(self) -> None:
        original_engine = db_module._engine
        db_module._engine = None
        try:
            with pytest.raises(RuntimeError, match="Database engine not initialized"):
                get_engine()
        finally:
            db_module._engine = original_engine

    async def test_returns_engine_when_initialized(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert get_engine() is engine
        finally:
            await dispose_engine()


class TestGetSessionFactory:
    """Tests for get_session_factory."""

    def test_raises_when_not_initialized(self) -> None:
        original_factory = db_module._session_factory
        db_module._session_factory = None
        try:
            with pytest.raises(RuntimeError, match="Session factory not initialized"):
                get_session_factory()
        finally:
            db_module._session_factory = original_factory


class TestInitEngine:
    """Tests for init_engine."""

    def test_sqlite_gets_no_pool_sizing(self) -> None:
        with patch("registry_api.core.database.create_async_engine", return_value=MagicMock()) as mock_create:
            init_engine("sqlite+aiosqlite:///:memory:", echo=False)
            mock_create.assert_called_once_with("sqlite+aiosqlite:///:memory:", echo=False)

    def test_postgres_gets_pool_sizing(self) -> None:
        with patch("registry_api.core.database.create_async_engine", return_value=MagicMock()) as mock_create:
            init_engine("postgresql+asyncpg://localhost/registry")
            mock_create.assert_called_once_with(
                "postgresql+asyncpg://localhost/registry",
                pool_size=10,
                max_overflow=5,
                pool_pre_ping=True,
            )

    def test_schema_sets_search_path(self) -> None:
        with patch("registry_api.core.database.create_async_engine", return_value=MagicMock()) as mock_create:
            init_engine("postgresql+asyncpg://localhost/registry", schema="pr_42")
            kwargs = mock_create.call_args.kwargs
            assert kwargs["connect_args"] == {"server_settings": {"search_path": "pr_42,public"}}

    def test_connect_args_must_be_dict(self) -> None:
        with (
            patch("registry_api.core.database.create_async_engine", return_value=MagicMock()),
            pytest.raises(TypeError, match="connect_args must be a dict"),
        ):
            init_engine("postgresql+asyncpg://localhost/registry", schema="pr_42", connect_args=["bad"])


class TestDisposeEngine:
    """Tests for dispose_engine."""

    async def test_disposes_engine(self) -> None:
        init_engine("sqlite+aiosqlite:///:memory:")
        await dispose_engine()
        assert db_module._engine is None
        assert db_module._session_factory is None

    async def test_dispose_when_no_engine(self) -> None:
        original = db_module._engine
        db_module._engine = None
        try:
            await dispose_engine()
        finally:
            db_module._engine = original


class TestStandaloneSession:
    """Tests for standalone_session."""

    async def test_yields_working_session_and_disposes(self) -> None:
        async with standalone_session("sqlite+aiosqlite:///:memory:") as session:
            result = await session.execute(text("SELECT 1"))
            assert result.scalar_one() == 1
        assert db_module._engine is None
