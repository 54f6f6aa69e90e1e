"""Development token CLI commands.

Production tokens come from the identity provider; these are signed with the
same secret so a local server accepts them.
"""

import typer

token_app = typer.Typer()


@token_app.command("issue")
def issue_token(
    principal_id: str = typer.Argument(..., help="Principal id placed in the token subject"),
    expires_minutes: int | None = typer.Option(
        None, "--expires-minutes", help="Token lifetime (defaults to JWT_ACCESS_TOKEN_EXPIRE_MINUTES)"
    ),
) -> None:
    """Mint a bearer token for a principal."""
    from registry_api.core.config import get_settings
    from registry_api.core.security import create_access_token

    settings = get_settings()
    if settings.is_production:
        typer.echo("Error: development tokens cannot be issued in production", err=True)
        raise typer.Exit(code=1)

    token = create_access_token(
        principal_id,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=expires_minutes or settings.jwt_access_token_expire_minutes,
        audience=settings.jwt_audience,
        issuer=settings.jwt_issuer,
    )
    typer.echo(token)
