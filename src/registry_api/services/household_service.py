"""Household service — scoped listing, lookup by id or code, and maintenance."""

import uuid

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.lib.access_policy import ScopePredicate
from registry_api.models.household import Household
from registry_api.models.resident import Resident
from registry_api.schemas.household import HouseholdCreateRequest
from registry_api.services.scope_filter import apply_scope

_UPDATABLE_HOUSEHOLD_FIELDS: frozenset[str] = frozenset({"house_number", "street_name", "subdivision"})


async def list_households(
    session: AsyncSession,
    scope: ScopePredicate,
    *,
    code: str | None = None,
    barangay_code: str | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[Household], int]:
    """List households visible under ``scope``.

    Args:
        session: Database session.
        scope: The caller's access scope.
        code: Prefix match on household code.
        barangay_code: Exact match on barangay.
        page: Page number.
        page_size: Items per page.

    Returns:
        Tuple of (households, total count).
    """
    query = apply_scope(select(Household), Household, scope)
    count_query = apply_scope(select(func.count(Household.id)), Household, scope)

    if code:
        query = query.where(Household.code.startswith(code, autoescape=True))
        count_query = count_query.where(Household.code.startswith(code, autoescape=True))

    if barangay_code:
        query = query.where(Household.barangay_code == barangay_code)
        count_query = count_query.where(Household.barangay_code == barangay_code)

    total = (await session.execute(count_query)).scalar_one()
    offset = (page - 1) * page_size
    result = await session.execute(query.order_by(Household.code).offset(offset).limit(page_size))
    return list(result.scalars().all()), total


async def get_household(session: AsyncSession, household_id: uuid.UUID) -> Household | None:
    """Get a household by ID (no access check)."""
    result = await session.execute(select(Household).where(Household.id == household_id))
    return result.scalar_one_or_none()


async def get_household_by_code(session: AsyncSession, code: str) -> Household | None:
    """Get a household by its registry code (no access check)."""
    result = await session.execute(select(Household).where(Household.code == code))
    return result.scalar_one_or_none()


async def create_household(session: AsyncSession, request: HouseholdCreateRequest) -> Household:
    """Register a household.

    Raises:
        ValueError: If the household code is already registered.
    """
    if await get_household_by_code(session, request.code) is not None:
        msg = f"Household code {request.code} already exists"
        raise ValueError(msg)

    household = Household(**request.model_dump())
    session.add(household)
    await session.commit()
    await session.refresh(household)
    return household


async def update_household(session: AsyncSession, household: Household, updates: dict) -> Household:
    """Update a household's address fields."""
    for field, value in updates.items():
        if field in _UPDATABLE_HOUSEHOLD_FIELDS:
            setattr(household, field, value)

    await session.commit()
    await session.refresh(household)
    return household


async def delete_household(session: AsyncSession, household: Household) -> None:
    """Delete a household; member residents keep their records with no household."""
    await session.execute(update(Resident).where(Resident.household_id == household.id).values(household_id=None))
    await session.delete(household)
    await session.commit()
