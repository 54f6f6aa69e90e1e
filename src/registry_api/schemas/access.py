"""Access diagnostics schemas."""

from pydantic import BaseModel, Field

from registry_api.schemas.geography import GeographyCodes


class AccessCheckRequest(GeographyCodes):
    """Target geography to evaluate the caller against."""


class AccessDecisionResponse(BaseModel):
    """Result of a point access evaluation."""

    allowed: bool
    reason: str = Field(description="Decision reason tag")


class ScopeResponse(BaseModel):
    """The caller's bulk access scope."""

    kind: str = Field(description="One of none, all, region, province, city, barangay")
    code: str | None = Field(default=None, description="Code matched at the scope's level")
