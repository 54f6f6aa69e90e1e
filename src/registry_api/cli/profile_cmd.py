"""User profile management CLI commands."""

import asyncio
from typing import TYPE_CHECKING

import typer

if TYPE_CHECKING:
    from registry_api.schemas.profile import ProfileCreateRequest

profile_app = typer.Typer()


@profile_app.command("create")
def create_profile(
    principal_id: str = typer.Option(..., "--id", help="Principal id issued by the identity provider"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    first_name: str = typer.Option(..., prompt=True, help="First name"),
    last_name: str = typer.Option(..., prompt=True, help="Last name"),
    role: str = typer.Option(
        "barangay_user",
        prompt=True,
        help="Role (super_admin/regional_admin/provincial_admin/city_admin/barangay_admin/barangay_user)",
    ),
    access_level: str | None = typer.Option(None, "--access-level", help="Override the role's default level"),
    barangay_code: str | None = typer.Option(None, "--barangay", help="9-digit barangay code"),
    city_code: str | None = typer.Option(None, "--city", help="6-digit city/municipality code"),
    province_code: str | None = typer.Option(None, "--province", help="4-digit province code"),
    region_code: str | None = typer.Option(None, "--region", help="2-digit region code"),
    if_not_exists: bool = typer.Option(
        False,
        "--if-not-exists",
        help="Exit successfully if the profile already exists (idempotent mode)",
    ),
) -> None:
    """Register the profile of an identity-provider principal."""
    from pydantic import ValidationError

    from registry_api.schemas.profile import ProfileCreateRequest

    try:
        request = ProfileCreateRequest(
            id=principal_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            role=role,
            access_level=access_level,
            barangay_code=barangay_code,
            city_municipality_code=city_code,
            province_code=province_code,
            region_code=region_code,
        )
    except ValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    asyncio.run(_create_profile(request, if_not_exists=if_not_exists))


async def _create_profile(request: "ProfileCreateRequest", *, if_not_exists: bool = False) -> None:
    """Async implementation of profile creation."""
    from registry_api.core.config import get_settings
    from registry_api.core.database import standalone_session
    from registry_api.services.profile_service import create_profile

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        try:
            profile = await create_profile(session, request)
        except ValueError as e:
            if if_not_exists and "already exists" in str(e):
                typer.echo(f"Profile '{request.id}' already exists, skipping (--if-not-exists)")
                return
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e
        typer.echo(f"Profile '{profile.id}' created with role '{profile.role}'")


@profile_app.command("list")
def list_profiles(
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    page_size: int = typer.Option(50, "--page-size", min=1, max=500, help="Profiles per page"),
) -> None:
    """List all profiles."""
    asyncio.run(_list_profiles(page, page_size))


async def _list_profiles(page: int, page_size: int) -> None:
    """Async implementation of profile listing."""
    from registry_api.core.config import get_settings
    from registry_api.core.database import standalone_session
    from registry_api.lib.access_policy import MatchAll
    from registry_api.services.profile_service import list_profiles

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        profiles, total = await list_profiles(session, MatchAll(), page, page_size)
        typer.echo(f"{'Id':<38} {'Email':<30} {'Role':<18} {'Jurisdiction':<12} {'Active':<8}")
        typer.echo("-" * 108)
        for profile in profiles:
            jurisdiction = (
                profile.barangay_code or profile.city_municipality_code or profile.province_code or profile.region_code
            )
            typer.echo(
                f"{profile.id!s:<38} {profile.email:<30} {profile.role:<18} {jurisdiction or '-':<12} "
                f"{profile.is_active!s:<8}"
            )
        typer.echo(f"\nTotal: {total}")


@profile_app.command("deactivate")
def deactivate_profile(
    principal_id: str = typer.Argument(..., help="Principal id"),
    reactivate: bool = typer.Option(False, "--reactivate", help="Re-enable the profile instead"),
) -> None:
    """Deactivate a profile; every access check for it is then denied."""
    asyncio.run(_set_active(principal_id, active=reactivate))


async def _set_active(principal_id: str, *, active: bool) -> None:
    from registry_api.core.config import get_settings
    from registry_api.core.database import standalone_session
    from registry_api.services.profile_service import ProfileNotFoundError, get_profile, set_profile_active

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        try:
            profile = await get_profile(session, principal_id)
        except ProfileNotFoundError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e
        await set_profile_active(session, profile, active=active)
        state = "active" if active else "inactive"
        typer.echo(f"Profile '{profile.id}' is now {state}")
