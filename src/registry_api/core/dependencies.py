"""FastAPI dependency injection for database sessions, principals, and access control.

Provides get_async_session, get_current_principal, and the helpers that turn
access-policy refusals into HTTP responses.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.config import Settings, get_settings
from registry_api.core.database import get_session_factory
from registry_api.core.security import InvalidTokenError, principal_id_from_token
from registry_api.lib.access_policy import AccessDecision, Principal, Role
from registry_api.services.profile_service import ProfileNotFoundError, resolve_principal

bearer_scheme = HTTPBearer(auto_error=False)

# Roles that administer a jurisdiction; barangay_user is a clerk role
ADMIN_ROLES: tuple[Role, ...] = (
    Role.SUPER_ADMIN,
    Role.REGIONAL_ADMIN,
    Role.PROVINCIAL_ADMIN,
    Role.CITY_ADMIN,
    Role.BARANGAY_ADMIN,
)


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Principal:
    """Decode the bearer token and resolve the requesting principal.

    The principal is rebuilt from the profile store on every request so role
    or jurisdiction changes apply immediately.

    Raises:
        HTTPException: 401 if the token is missing or invalid, or no profile
            exists for its subject.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    try:
        principal_id = principal_id_from_token(
            credentials.credentials,
            settings.jwt_secret_key,
            settings.jwt_algorithm,
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            leeway=settings.jwt_leeway_seconds,
        )
        return await resolve_principal(session, principal_id)
    except (InvalidTokenError, ProfileNotFoundError) as exc:
        raise credentials_exception from exc


def require_role(*roles: str) -> Callable[..., Any]:
    """Factory that creates a dependency requiring one of the given roles.

    Args:
        *roles: Allowed role names (e.g. the members of ``ADMIN_ROLES``).

    Returns:
        A FastAPI dependency returning the principal when its role is allowed.
    """

    async def role_checker(
        principal: Annotated[Principal, Depends(get_current_principal)],
    ) -> Principal:
        if principal.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{principal.role}' does not have access to this resource",
            )
        return principal

    return role_checker


def access_denied(decision: AccessDecision) -> HTTPException:
    """Build the 403 response for a refused point access.

    Args:
        decision: A deny decision.

    Returns:
        An HTTPException carrying the reason tag in the detail and the
        ``X-Access-Reason`` header.
    """
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=f"Access denied: {decision.reason}",
        headers={"X-Access-Reason": str(decision.reason)},
    )
