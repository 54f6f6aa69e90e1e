"""Registry schema migrations, driven through Alembic's command API.

The database URL and schema come from the application settings (see
``alembic/env.py``); ``--config`` only locates the Alembic ini file.
"""

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from loguru import logger

if TYPE_CHECKING:
    from alembic.config import Config

db_app = typer.Typer()

_CONFIG_OPTION = typer.Option("alembic.ini", "--config", "-c", help="Path to alembic.ini")


def _alembic_config(config_path: str) -> "Config":
    from alembic.config import Config

    if not Path(config_path).is_file():
        typer.echo(f"Error: Alembic config not found: {config_path}", err=True)
        raise typer.Exit(code=1)
    return Config(config_path)


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    config_path: str = _CONFIG_OPTION,
) -> None:
    """Apply migrations up to REVISION."""
    from alembic import command

    config = _alembic_config(config_path)
    logger.info(f"Migrating registry schema up to {revision}")
    command.upgrade(config, revision)
    logger.info(f"Registry schema is at {revision}")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
    config_path: str = _CONFIG_OPTION,
) -> None:
    """Revert migrations down to REVISION (one step by default)."""
    from alembic import command

    config = _alembic_config(config_path)
    logger.info(f"Migrating registry schema down to {revision}")
    command.downgrade(config, revision)


@db_app.command()
def current(config_path: str = _CONFIG_OPTION) -> None:
    """Show the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(config_path), verbose=True)


@db_app.command()
def history(config_path: str = _CONFIG_OPTION) -> None:
    """List known migrations, newest first."""
    from alembic import command

    command.history(_alembic_config(config_path), indicate_current=False)
