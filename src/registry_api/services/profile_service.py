"""Profile store and principal resolution.

Maps an identity-provider principal id to its stored profile and builds the
per-request :class:`Principal` the access policy evaluates.
"""

import uuid

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.lib.access_policy import (
    ROLE_DEFAULT_LEVELS,
    GeoLevel,
    GeoScope,
    Principal,
    Role,
    ScopePredicate,
)
from registry_api.models.user_profile import UserProfile
from registry_api.schemas.profile import ProfileCreateRequest
from registry_api.services.scope_filter import apply_scope

# Levels from most to least specific; a scope keeps codes from its level upward
_LEVEL_ORDER: tuple[GeoLevel, ...] = (
    GeoLevel.BARANGAY,
    GeoLevel.CITY,
    GeoLevel.PROVINCE,
    GeoLevel.REGION,
    GeoLevel.NATIONAL,
)


class ProfileNotFoundError(LookupError):
    """Raised when no profile exists for a principal id."""

    def __init__(self, principal_id: object) -> None:
        self.principal_id = principal_id
        super().__init__(f"No profile for principal {principal_id}")


def _parse_principal_id(principal_id: uuid.UUID | str) -> uuid.UUID:
    if isinstance(principal_id, uuid.UUID):
        return principal_id
    try:
        return uuid.UUID(principal_id)
    except ValueError as e:
        raise ProfileNotFoundError(principal_id) from e


async def get_profile(session: AsyncSession, principal_id: uuid.UUID | str) -> UserProfile:
    """Fetch the profile of a principal.

    Args:
        session: The database session.
        principal_id: Identity-provider subject id.

    Returns:
        The stored profile, active or not.

    Raises:
        ProfileNotFoundError: If no profile exists (including malformed ids).
    """
    profile_id = _parse_principal_id(principal_id)
    result = await session.execute(select(UserProfile).where(UserProfile.id == profile_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        logger.info(f"No profile found for principal {profile_id}")
        raise ProfileNotFoundError(profile_id)
    return profile


def build_assigned_geography(profile: UserProfile) -> GeoScope | None:
    """Derive the jurisdiction a profile administers.

    Super admins and unrecognized roles get no geography. The stored
    ``access_level`` wins over the role's default level. Codes below the
    level are dropped; an unrecognized stored level is passed through as-is.
    """
    if profile.role == Role.SUPER_ADMIN:
        return None
    try:
        role = Role(profile.role)
    except ValueError:
        logger.warning(f"Profile {profile.id} has unrecognized role {profile.role!r}")
        return None

    level = profile.access_level or ROLE_DEFAULT_LEVELS[role]
    codes = {
        GeoLevel.BARANGAY: profile.barangay_code,
        GeoLevel.CITY: profile.city_municipality_code,
        GeoLevel.PROVINCE: profile.province_code,
        GeoLevel.REGION: profile.region_code,
    }
    if level in _LEVEL_ORDER:
        kept = _LEVEL_ORDER[_LEVEL_ORDER.index(GeoLevel(level)) :]
        codes = {lvl: code if lvl in kept else None for lvl, code in codes.items()}

    return GeoScope(
        level=level,
        barangay_code=codes[GeoLevel.BARANGAY],
        city_code=codes[GeoLevel.CITY],
        province_code=codes[GeoLevel.PROVINCE],
        region_code=codes[GeoLevel.REGION],
    )


def principal_from_profile(profile: UserProfile) -> Principal:
    """Build a request-scoped principal from a stored profile."""
    return Principal(
        id=str(profile.id),
        role=profile.role,
        is_active=bool(profile.is_active),
        assigned_geography=build_assigned_geography(profile),
    )


async def resolve_principal(session: AsyncSession, principal_id: uuid.UUID | str) -> Principal:
    """Resolve a principal id into a fresh :class:`Principal`.

    Inactive profiles resolve normally with ``is_active=False``; the access
    policy denies them.

    Raises:
        ProfileNotFoundError: If no profile exists.
    """
    profile = await get_profile(session, principal_id)
    return principal_from_profile(profile)


def grants_wider_scope(grantor: Principal, request: ProfileCreateRequest) -> bool:
    """Whether the requested profile would administer more than its grantor.

    Only super admins may create super admins. Other grantors may assign
    levels at or below their own; a grantor without a recognised level
    grants nothing.
    """
    if grantor.is_super_admin:
        return False
    if request.role == Role.SUPER_ADMIN:
        return True
    own = grantor.assigned_geography
    if own is None or own.level not in _LEVEL_ORDER:
        return True
    granted = request.access_level or ROLE_DEFAULT_LEVELS[Role(request.role)]
    return _LEVEL_ORDER.index(GeoLevel(granted)) > _LEVEL_ORDER.index(GeoLevel(own.level))


async def create_profile(session: AsyncSession, request: ProfileCreateRequest) -> UserProfile:
    """Register a profile for an identity-provider principal.

    Raises:
        ValueError: If the id or email already has a profile.
    """
    existing = await session.execute(
        select(UserProfile).where((UserProfile.id == request.id) | (UserProfile.email == request.email))
    )
    if existing.scalar_one_or_none() is not None:
        msg = "Profile id or email already exists"
        raise ValueError(msg)

    profile = UserProfile(
        id=request.id,
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        role=request.role,
        access_level=request.access_level,
        barangay_code=request.barangay_code,
        city_municipality_code=request.city_municipality_code,
        province_code=request.province_code,
        region_code=request.region_code,
    )
    session.add(profile)
    await session.commit()
    await session.refresh(profile)
    logger.info(f"Created profile {profile.id} with role {profile.role}")
    return profile


async def list_profiles(
    session: AsyncSession,
    scope: ScopePredicate,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[UserProfile], int]:
    """List profiles inside a jurisdiction scope with pagination.

    Args:
        session: The database session.
        scope: The caller's scope predicate.
        page: Page number (1-based).
        page_size: Items per page.

    Returns:
        Tuple of (profiles list, total count).
    """
    count_query = apply_scope(select(func.count(UserProfile.id)), UserProfile, scope)
    total = (await session.execute(count_query)).scalar_one()

    offset = (page - 1) * page_size
    query = apply_scope(select(UserProfile), UserProfile, scope)
    query = query.order_by(UserProfile.last_name, UserProfile.first_name).offset(offset).limit(page_size)
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def set_profile_active(session: AsyncSession, profile: UserProfile, *, active: bool) -> UserProfile:
    """Activate or deactivate a profile."""
    profile.is_active = active
    await session.commit()
    await session.refresh(profile)
    logger.info(f"Profile {profile.id} is_active set to {active}")
    return profile
