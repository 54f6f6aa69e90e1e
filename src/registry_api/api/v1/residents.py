"""Resident API endpoints: scoped search, detail, and maintenance.

Every single-record operation is authorized against the record's geography;
listing is filtered by the caller's access scope.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api.core.dependencies import access_denied, get_async_session, get_current_principal
from registry_api.lib.access_policy import Principal
from registry_api.models.resident import Resident
from registry_api.schemas.common import ErrorResponse, PaginationMeta
from registry_api.schemas.resident import (
    PaginatedResidentResponse,
    ResidentCreateRequest,
    ResidentResponse,
    ResidentUpdateRequest,
)
from registry_api.services.access_service import check_record_access, principal_scope
from registry_api.services.resident_service import (
    create_resident,
    delete_resident,
    get_resident,
    search_residents,
    update_resident,
)

residents_router = APIRouter(
    prefix="/residents",
    tags=["residents"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
        403: {"model": ErrorResponse, "description": "Outside the caller's jurisdiction"},
    },
)


async def _get_authorized_resident(
    session: AsyncSession,
    principal: Principal,
    resident_id: uuid.UUID,
    action: str,
) -> Resident:
    resident = await get_resident(session, resident_id)
    if resident is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resident not found")
    decision = check_record_access(principal, resident.geography, action=action, resource=f"resident {resident_id}")
    if not decision.allowed:
        raise access_denied(decision)
    return resident


@residents_router.get("", response_model=PaginatedResidentResponse)
async def search_residents_endpoint(
    first_name: str | None = Query(None),
    last_name: str | None = Query(None),
    barangay_code: str | None = Query(None),
    household_id: uuid.UUID | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> PaginatedResidentResponse:
    """Search residents within the caller's jurisdiction."""
    residents, total = await search_residents(
        session,
        principal_scope(principal),
        first_name=first_name,
        last_name=last_name,
        barangay_code=barangay_code,
        household_id=household_id,
        page=page,
        page_size=page_size,
    )
    return PaginatedResidentResponse(
        items=[ResidentResponse.model_validate(r) for r in residents],
        pagination=PaginationMeta.for_page(total, page, page_size),
    )


@residents_router.post("", response_model=ResidentResponse, status_code=status.HTTP_201_CREATED)
async def create_resident_endpoint(
    request: ResidentCreateRequest,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> ResidentResponse:
    """Register a resident inside the caller's jurisdiction."""
    decision = check_record_access(principal, request.to_geography(), action="create", resource="new resident")
    if not decision.allowed:
        raise access_denied(decision)
    resident = await create_resident(session, request)
    return ResidentResponse.model_validate(resident)


@residents_router.get("/{resident_id}", response_model=ResidentResponse)
async def get_resident_endpoint(
    resident_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> ResidentResponse:
    """Get a resident by ID."""
    resident = await _get_authorized_resident(session, principal, resident_id, "read")
    return ResidentResponse.model_validate(resident)


@residents_router.patch("/{resident_id}", response_model=ResidentResponse)
async def update_resident_endpoint(
    resident_id: uuid.UUID,
    request: ResidentUpdateRequest,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> ResidentResponse:
    """Update a resident's personal details."""
    resident = await _get_authorized_resident(session, principal, resident_id, "update")
    updated = await update_resident(session, resident, request.model_dump(exclude_unset=True))
    return ResidentResponse.model_validate(updated)


@residents_router.delete("/{resident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resident_endpoint(
    resident_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
    principal: Principal = Depends(get_current_principal),
) -> None:
    """Delete a resident record."""
    resident = await _get_authorized_resident(session, principal, resident_id, "delete")
    await delete_resident(session, resident)
