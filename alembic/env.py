"""Alembic environment for the registry tables.

Migrations run through the async engine. When ``DATABASE_SCHEMA`` is set the
schema is created if needed, placed first on the search path, and also holds
the ``alembic_version`` table, so preview databases never touch ``public``.
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from registry_api.core.config import get_settings

# Registers every registry table on Base.metadata for autogenerate
from registry_api.models import Household, Resident, UserProfile  # noqa: F401
from registry_api.models.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
settings = get_settings()


def _configure(schema: str | None, **kwargs: object) -> None:
    if schema is not None:
        kwargs["version_table_schema"] = schema
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    """Emit the migration SQL without connecting."""
    _configure(
        settings.database_schema,
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def _run_on_connection(connection: Connection) -> None:
    schema = settings.database_schema
    if schema is not None:
        connection.execute(text(f'SET search_path TO "{schema}", public'))
    _configure(schema, connection=connection)


async def _run_online() -> None:
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = settings.database_url
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    try:
        async with engine.connect() as connection:
            if settings.database_schema is not None:
                await connection.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.database_schema}"'))
                await connection.commit()
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(_run_online())
