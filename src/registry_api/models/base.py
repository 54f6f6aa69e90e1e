"""Declarative base and shared column mixins for ORM models."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from registry_api.lib.access_policy import RecordGeography


class Base(DeclarativeBase):
    """Declarative base for all registry models."""


class UUIDMixin:
    """UUID primary key generated client-side."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """Creation and last-update timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class GeoAttributionMixin:
    """Denormalized PSGC codes locating a row in the geographic hierarchy.

    Codes are copied from the row's barangay assignment; their consistency is
    owned by the PSGC reference data.
    """

    barangay_code: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    city_municipality_code: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    province_code: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    region_code: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)

    @property
    def geography(self) -> RecordGeography:
        """The row's attribution as an access-policy value."""
        return RecordGeography(
            barangay_code=self.barangay_code,
            city_code=self.city_municipality_code,
            province_code=self.province_code,
            region_code=self.region_code,
        )
