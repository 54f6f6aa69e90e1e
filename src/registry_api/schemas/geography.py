"""Geographic attribution schemas.

PSGC codes are digit strings: region (2), province (4), city/municipality
(6), barangay (9). Inputs are stripped; blank values become None.
"""

from pydantic import BaseModel, Field, field_validator

from registry_api.lib.access_policy import RecordGeography


class GeographyCodes(BaseModel):
    """The four denormalized codes locating a record."""

    barangay_code: str | None = Field(default=None, pattern=r"^\d{9}$")
    city_municipality_code: str | None = Field(default=None, pattern=r"^\d{6}$")
    province_code: str | None = Field(default=None, pattern=r"^\d{4}$")
    region_code: str | None = Field(default=None, pattern=r"^\d{2}$")

    @field_validator("barangay_code", "city_municipality_code", "province_code", "region_code", mode="before")
    @classmethod
    def strip_code(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip() or None
        return v

    def to_geography(self) -> RecordGeography:
        """Convert to the access-policy value type."""
        return RecordGeography(
            barangay_code=self.barangay_code,
            city_code=self.city_municipality_code,
            province_code=self.province_code,
            region_code=self.region_code,
        )


class RequiredGeographyCodes(GeographyCodes):
    """Geography for records being written: all four codes must be present."""

    barangay_code: str = Field(pattern=r"^\d{9}$")
    city_municipality_code: str = Field(pattern=r"^\d{6}$")
    province_code: str = Field(pattern=r"^\d{4}$")
    region_code: str = Field(pattern=r"^\d{2}$")
