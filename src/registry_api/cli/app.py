"""Typer CLI root application with serve command."""

import typer

from registry_api.core.config import get_settings
from registry_api.core.logging import setup_logging

app = typer.Typer(name="registry-api", help="Barangay civil registry management CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "registry_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from registry_api.cli.access_cmd import access_app
    from registry_api.cli.db_cmd import db_app
    from registry_api.cli.profile_cmd import profile_app
    from registry_api.cli.token_cmd import token_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(profile_app, name="profile", help="User profile management commands")
    app.add_typer(access_app, name="access", help="Access policy diagnostics")
    app.add_typer(token_app, name="token", help="Development token commands")


_register_subcommands()
