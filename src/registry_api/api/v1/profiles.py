"""Profile endpoints, service health, and version info.

GET /health, GET /info, GET /me, GET /profiles, POST /profiles.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from registry_api import __version__
from registry_api.core.config import Settings, get_settings
from registry_api.core.dependencies import (
    ADMIN_ROLES,
    access_denied,
    get_async_session,
    get_current_principal,
    require_role,
)
from registry_api.lib.access_policy import Principal, describe_scope
from registry_api.schemas.access import ScopeResponse
from registry_api.schemas.common import PaginationMeta, PaginationParams
from registry_api.schemas.profile import MeResponse, PaginatedProfileResponse, ProfileCreateRequest, ProfileResponse
from registry_api.services import profile_service
from registry_api.services.access_service import check_record_access, principal_scope

router = APIRouter(tags=["profiles"])


@router.get("/health", status_code=200)
async def health_check() -> dict:
    """Health check endpoint (no authentication required)."""
    return {"status": "healthy"}


@router.get("/info", status_code=200)
async def info(
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict:
    """Return application version and environment."""
    return {
        "version": __version__,
        "environment": settings.environment,
    }


@router.get("/me", response_model=MeResponse)
async def get_me(
    principal: Annotated[Principal, Depends(get_current_principal)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> MeResponse:
    """Get the current principal's profile and resolved access scope."""
    profile = await profile_service.get_profile(session, principal.id)
    return MeResponse(
        profile=ProfileResponse.model_validate(profile),
        scope=ScopeResponse(**describe_scope(principal_scope(principal))),
    )


@router.get("/profiles", response_model=PaginatedProfileResponse)
async def list_profiles(
    principal: Annotated[Principal, Depends(require_role(*ADMIN_ROLES))],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    pagination: Annotated[PaginationParams, Depends()],
) -> PaginatedProfileResponse:
    """List profiles inside the caller's jurisdiction (admins only)."""
    profiles, total = await profile_service.list_profiles(
        session, principal_scope(principal), pagination.page, pagination.page_size
    )
    return PaginatedProfileResponse(
        items=[ProfileResponse.model_validate(p) for p in profiles],
        pagination=PaginationMeta.for_page(total, pagination.page, pagination.page_size),
    )


@router.post("/profiles", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    request: ProfileCreateRequest,
    principal: Annotated[Principal, Depends(require_role(*ADMIN_ROLES))],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> ProfileResponse:
    """Register a profile inside the caller's jurisdiction (admins only).

    The new profile's geography must be visible to the caller, and its level
    may not be wider than the caller's own.
    """
    if profile_service.grants_wider_scope(principal, request):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role '{principal.role}' cannot grant role '{request.role}' at this level",
        )
    decision = check_record_access(principal, request.to_geography(), action="create", resource=f"profile {request.id}")
    if not decision.allowed:
        raise access_denied(decision)
    try:
        profile = await profile_service.create_profile(session, request)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return ProfileResponse.model_validate(profile)
