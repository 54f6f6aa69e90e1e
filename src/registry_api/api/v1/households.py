"""Household API endpoints: scoped listing, detail, and maintenance."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.dependencies import access_denied, get_async_session, get_current_principal
from registry_api.lib.access_policy import Principal
from registry_api.models.household import Household
from registry_api.schemas.common import ErrorResponse, PaginationMeta
from registry_api.schemas.household import (
    HouseholdCreateRequest,
    HouseholdResponse,
    HouseholdUpdateRequest,
    PaginatedHouseholdResponse,
)
from registry_api.services.access_service import check_record_access, principal_scope
from registry_api.services.household_service import (
    create_household,
    delete_household,
    get_household,
    list_households,
    update_household,
)

households_router = APIRouter(
    prefix="/households",
    tags=["households"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
        403: {"model": ErrorResponse, "description": "Outside the caller's jurisdiction"},
    },
)


async def _get_authorized_household(
    session: AsyncSession,
    principal: Principal,
    household_id: uuid.UUID,
    action: str,
) -> Household:
    household = await get_household(session, household_id)
    if household is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Household not found")
    decision = check_record_access(
        principal, household.geography, action=action, resource=f"household {household.code}"
    )
    if not decision.allowed:
        raise access_denied(decision)
    return household


@households_router.get("", response_model=PaginatedHouseholdResponse)
async def list_households_endpoint(
    code: str | None = Query(None, description="Household code prefix"),
    barangay_code: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> PaginatedHouseholdResponse:
    """List households within the caller's jurisdiction."""
    households, total = await list_households(
        session,
        principal_scope(principal),
        code=code,
        barangay_code=barangay_code,
        page=page,
        page_size=page_size,
    )
    return PaginatedHouseholdResponse(
        items=[HouseholdResponse.model_validate(h) for h in households],
        pagination=PaginationMeta.for_page(total, page, page_size),
    )


@households_router.post("", response_model=HouseholdResponse, status_code=status.HTTP_201_CREATED)
async def create_household_endpoint(
    request: HouseholdCreateRequest,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> HouseholdResponse:
    """Register a household inside the caller's jurisdiction."""
    decision = check_record_access(
        principal, request.to_geography(), action="create", resource=f"household {request.code}"
    )
    if not decision.allowed:
        raise access_denied(decision)
    try:
        household = await create_household(session, request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return HouseholdResponse.model_validate(household)


@households_router.get("/{household_id}", response_model=HouseholdResponse)
async def get_household_endpoint(
    household_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> HouseholdResponse:
    """Get a household by ID."""
    household = await _get_authorized_household(session, principal, household_id, "read")
    return HouseholdResponse.model_validate(household)


@households_router.patch("/{household_id}", response_model=HouseholdResponse)
async def update_household_endpoint(
    household_id: uuid.UUID,
    request: HouseholdUpdateRequest,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> HouseholdResponse:
    """Update a household's address details."""
    household = await _get_authorized_household(session, principal, household_id, "update")
    updated = await update_household(session, household, request.model_dump(exclude_unset=True))
    return HouseholdResponse.model_validate(updated)


@households_router.delete("/{household_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_household_endpoint(
    household_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> None:
    """Delete a household."""
    household = await _get_authorized_household(session, principal, household_id, "delete")
    await delete_household(session, household)
