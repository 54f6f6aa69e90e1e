"""Schemas shared by every list and error response."""

import math

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    """Page selection accepted by list endpoints."""

    page: int = Field(default=1, ge=1, description="1-based page number")
    page_size: int = Field(default=20, ge=1, le=100, description="Rows per page")


class PaginationMeta(BaseModel):
    """Position of a returned page within the caller's visible rows."""

    total: int = Field(description="Rows visible to the caller across all pages")
    page: int
    page_size: int
    total_pages: int = Field(description="At least 1, even when nothing is visible")

    @classmethod
    def for_page(cls, total: int, page: int, page_size: int) -> "PaginationMeta":
        return cls(
            total=total,
            page=page,
            page_size=page_size,
            total_pages=max(1, math.ceil(total / page_size)),
        )


class ErrorResponse(BaseModel):
    """Body of 4xx responses raised through HTTPException."""

    detail: str = Field(description="Human-readable error message; refusals read 'Access denied: <reason>'")
