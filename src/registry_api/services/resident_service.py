"""Resident service — scoped search, detail retrieval, and maintenance."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.lib.access_policy import ScopePredicate
from registry_api.models.household import Household
from registry_api.models.resident import Resident
from registry_api.schemas.resident import ResidentCreateRequest
from registry_api.services.scope_filter import scope_clause

_UPDATABLE_RESIDENT_FIELDS: frozenset[str] = frozenset(
    {"first_name", "middle_name", "last_name", "birthdate", "sex", "civil_status", "household_id"}
)


async def search_residents(
    session: AsyncSession,
    scope: ScopePredicate,
    *,
    first_name: str | None = None,
    last_name: str | None = None,
    barangay_code: str | None = None,
    household_id: uuid.UUID | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[Resident], int]:
    """Search residents visible under ``scope`` using AND logic.

    Args:
        session: Database session.
        scope: The caller's access scope; applied before any other filter.
        first_name: Case-insensitive substring match on first name.
        last_name: Case-insensitive substring match on last name.
        barangay_code: Exact match on barangay.
        household_id: Exact match on household membership.
        page: Page number.
        page_size: Items per page.

    Returns:
        Tuple of (residents, total count).
    """
    conditions = [scope_clause(Resident, scope)]

    if first_name:
        conditions.append(Resident.first_name.icontains(first_name, autoescape=True))
    if last_name:
        conditions.append(Resident.last_name.icontains(last_name, autoescape=True))
    if barangay_code:
        conditions.append(Resident.barangay_code == barangay_code)
    if household_id is not None:
        conditions.append(Resident.household_id == household_id)

    count_query = select(func.count(Resident.id)).where(*conditions)
    total = (await session.execute(count_query)).scalar_one()

    offset = (page - 1) * page_size
    query = (
        select(Resident)
        .where(*conditions)
        .order_by(Resident.last_name, Resident.first_name)
        .offset(offset)
        .limit(page_size)
    )
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def get_resident(session: AsyncSession, resident_id: uuid.UUID) -> Resident | None:
    """Get a single resident by ID (no access check)."""
    result = await session.execute(select(Resident).where(Resident.id == resident_id))
    return result.scalar_one_or_none()


async def _check_household(session: AsyncSession, household_id: uuid.UUID, barangay_code: str | None) -> None:
    household = await session.get(Household, household_id)
    if household is None:
        msg = "Household not found"
        raise ValueError(msg)
    if household.barangay_code != barangay_code:
        msg = "Household belongs to a different barangay"
        raise ValueError(msg)


async def create_resident(session: AsyncSession, request: ResidentCreateRequest) -> Resident:
    """Register a resident.

    Raises:
        ValueError: If the household does not exist or is in another barangay.
    """
    if request.household_id is not None:
        await _check_household(session, request.household_id, request.barangay_code)

    resident = Resident(**request.model_dump())
    session.add(resident)
    await session.commit()
    await session.refresh(resident)
    return resident


async def update_resident(session: AsyncSession, resident: Resident, updates: dict) -> Resident:
    """Update a resident's personal fields.

    Raises:
        ValueError: If a new household does not exist or is in another barangay.
    """
    if updates.get("household_id") is not None and updates["household_id"] != resident.household_id:
        await _check_household(session, updates["household_id"], resident.barangay_code)

    for field, value in updates.items():
        if field in _UPDATABLE_RESIDENT_FIELDS:
            setattr(resident, field, value)

    await session.commit()
    await session.refresh(resident)
    return resident


async def delete_resident(session: AsyncSession, resident: Resident) -> None:
    """Delete a resident record."""
    await session.delete(resident)
    await session.commit()
