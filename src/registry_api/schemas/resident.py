"""Resident Pydantic v2 schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from registry_api.schemas.common import PaginationMeta
from registry_api.schemas.geography import RequiredGeographyCodes

_SEX_PATTERN = "^(male|female)$"


class ResidentCreateRequest(RequiredGeographyCodes):
    """Request to register a resident."""

    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    birthdate: date | None = None
    sex: str | None = Field(default=None, pattern=_SEX_PATTERN)
    civil_status: str | None = Field(default=None, max_length=20)
    household_id: UUID | None = None


class ResidentUpdateRequest(BaseModel):
    """Partial update of a resident's personal details.

    Geography is not updatable here; moving a resident between barangays is a
    transfer handled by re-registration.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    birthdate: date | None = None
    sex: str | None = Field(default=None, pattern=_SEX_PATTERN)
    civil_status: str | None = Field(default=None, max_length=20)
    household_id: UUID | None = None


class ResidentResponse(BaseModel):
    """Resident details."""

    id: UUID
    first_name: str
    middle_name: str | None = None
    last_name: str
    birthdate: date | None = None
    sex: str | None = None
    civil_status: str | None = None
    household_id: UUID | None = None
    barangay_code: str | None = None
    city_municipality_code: str | None = None
    province_code: str | None = None
    region_code: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaginatedResidentResponse(BaseModel):
    """Paginated list of residents."""

    items: list[ResidentResponse]
    pagination: PaginationMeta
