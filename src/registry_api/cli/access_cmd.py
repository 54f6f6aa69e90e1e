"""Access policy diagnostics CLI commands.

``access check`` simulates a point decision for a stored principal against a
target geography; ``access scope`` prints the principal's bulk scope.
"""

import asyncio

import typer

from registry_api.lib.access_policy import Principal, RecordGeography

access_app = typer.Typer()


@access_app.command("check")
def check_access(
    principal_id: str = typer.Argument(..., help="Principal id"),
    barangay_code: str | None = typer.Option(None, "--barangay", help="Target barangay code"),
    city_code: str | None = typer.Option(None, "--city", help="Target city/municipality code"),
    province_code: str | None = typer.Option(None, "--province", help="Target province code"),
    region_code: str | None = typer.Option(None, "--region", help="Target region code"),
) -> None:
    """Evaluate a principal against a target geography."""
    target = RecordGeography(
        barangay_code=barangay_code,
        city_code=city_code,
        province_code=province_code,
        region_code=region_code,
    )
    allowed = asyncio.run(_check_access(principal_id, target))
    if not allowed:
        raise typer.Exit(code=2)


async def _check_access(principal_id: str, target: RecordGeography) -> bool:
    from registry_api.lib.access_policy import evaluate

    principal = await _resolve(principal_id)
    decision = evaluate(principal, target)
    verdict = "ALLOW" if decision.allowed else "DENY"
    typer.echo(f"{verdict} ({decision.reason})")
    return decision.allowed


@access_app.command("scope")
def show_scope(
    principal_id: str = typer.Argument(..., help="Principal id"),
) -> None:
    """Print the scope predicate applied to a principal's list queries."""
    asyncio.run(_show_scope(principal_id))


async def _show_scope(principal_id: str) -> None:
    from registry_api.lib.access_policy import build_scope, describe_scope

    principal = await _resolve(principal_id)
    described = describe_scope(build_scope(principal))
    if described["code"] is None:
        typer.echo(described["kind"])
    else:
        typer.echo(f"{described['kind']} {described['code']}")


async def _resolve(principal_id: str) -> Principal:
    from registry_api.core.config import get_settings
    from registry_api.core.database import standalone_session
    from registry_api.services.profile_service import ProfileNotFoundError, resolve_principal

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        try:
            return await resolve_principal(session, principal_id)
        except ProfileNotFoundError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e
