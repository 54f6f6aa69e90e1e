"""Process-wide async engine and session factory.

The API lifespan initialises one engine per process; CLI commands open a
short-lived one through :func:`standalone_session`.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

_POOL_DEFAULTS = {"pool_size": 10, "max_overflow": 5, "pool_pre_ping": True}


def get_engine() -> AsyncEngine:
    if _engine is None:
        msg = "Database engine not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


def _engine_options(database_url: str, schema: str | None, options: dict[str, object]) -> dict[str, object]:
    if schema is not None:
        connect_args = options.get("connect_args", {})
        if not isinstance(connect_args, dict):
            msg = "connect_args must be a dict"
            raise TypeError(msg)
        # asyncpg applies server_settings on every new connection
        options["connect_args"] = {**connect_args, "server_settings": {"search_path": f"{schema},public"}}

    # SQLite and StaticPool engines reject pool sizing arguments
    pooled = options.get("poolclass") is not StaticPool and not database_url.startswith("sqlite")
    if pooled:
        for key, value in _POOL_DEFAULTS.items():
            options.setdefault(key, value)
    return options


def init_engine(database_url: str, *, schema: str | None = None, **kwargs: object) -> AsyncEngine:
    """Create the engine and session factory, replacing any previous ones.

    Args:
        database_url: Async SQLAlchemy URL (``postgresql+asyncpg`` or
            ``sqlite+aiosqlite``).
        schema: PostgreSQL schema to put first on the search path.
        **kwargs: Passed through to ``create_async_engine``.
    """
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_async_engine(database_url, **_engine_options(database_url, schema, kwargs))
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory  # noqa: PLW0603
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()


@asynccontextmanager
async def standalone_session(database_url: str, *, schema: str | None = None) -> AsyncGenerator[AsyncSession]:
    """Yield a session from an engine that lives only as long as the block."""
    init_engine(database_url, schema=schema)
    try:
        async with get_session_factory()() as session:
            yield session
    finally:
        await dispose_engine()
