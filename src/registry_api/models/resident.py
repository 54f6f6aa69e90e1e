"""Resident model."""

import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registry_api.models.base import Base, GeoAttributionMixin, TimestampMixin, UUIDMixin


class Resident(Base, UUIDMixin, TimestampMixin, GeoAttributionMixin):
    """A person registered in a barangay, optionally a member of a household."""

    __tablename__ = "residents"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    birthdate: Mapped[date | None] = mapped_column(Date, nullable=True)
    sex: Mapped[str | None] = mapped_column(String(10), nullable=True)
    civil_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    household_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("households.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    household = relationship("Household", back_populates="residents")
