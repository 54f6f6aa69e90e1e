"""User profile Pydantic v2 schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from registry_api.schemas.access import ScopeResponse
from registry_api.schemas.common import PaginationMeta
from registry_api.schemas.geography import GeographyCodes

_ROLE_PATTERN = "^(super_admin|regional_admin|provincial_admin|city_admin|barangay_admin|barangay_user)$"
_LEVEL_PATTERN = "^(barangay|city|province|region|national)$"


class ProfileCreateRequest(GeographyCodes):
    """Request to register the profile of an identity-provider principal."""

    id: UUID = Field(description="Principal id issued by the identity provider")
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    role: str = Field(pattern=_ROLE_PATTERN)
    access_level: str | None = Field(default=None, pattern=_LEVEL_PATTERN)


class ProfileResponse(BaseModel):
    """User profile information."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: str
    access_level: str | None = None
    is_active: bool
    barangay_code: str | None = None
    city_municipality_code: str | None = None
    province_code: str | None = None
    region_code: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaginatedProfileResponse(BaseModel):
    """Paginated list of profiles."""

    items: list[ProfileResponse]
    pagination: PaginationMeta


class MeResponse(BaseModel):
    """The current principal's profile and resolved access scope."""

    profile: ProfileResponse
    scope: ScopeResponse
