"""Household Pydantic v2 schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from registry_api.schemas.common import PaginationMeta
from registry_api.schemas.geography import RequiredGeographyCodes

_HOUSEHOLD_CODE_PATTERN = r"^\d{9}-\d{4}-\d{4}-\d{4}$"


class HouseholdCreateRequest(RequiredGeographyCodes):
    """Request to register a household."""

    code: str = Field(pattern=_HOUSEHOLD_CODE_PATTERN, description="e.g. 042114014-0000-0001-0001")
    house_number: str | None = Field(default=None, max_length=50)
    street_name: str | None = Field(default=None, max_length=200)
    subdivision: str | None = Field(default=None, max_length=200)

    @model_validator(mode="after")
    def code_in_barangay(self) -> "HouseholdCreateRequest":
        if not self.code.startswith(f"{self.barangay_code}-"):
            msg = "Household code must start with the household's barangay code"
            raise ValueError(msg)
        return self


class HouseholdUpdateRequest(BaseModel):
    """Partial update of a household's address details."""

    house_number: str | None = Field(default=None, max_length=50)
    street_name: str | None = Field(default=None, max_length=200)
    subdivision: str | None = Field(default=None, max_length=200)


class HouseholdResponse(BaseModel):
    """Household details."""

    id: UUID
    code: str
    house_number: str | None = None
    street_name: str | None = None
    subdivision: str | None = None
    barangay_code: str | None = None
    city_municipality_code: str | None = None
    province_code: str | None = None
    region_code: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaginatedHouseholdResponse(BaseModel):
    """Paginated list of households."""

    items: list[HouseholdResponse]
    pagination: PaginationMeta
