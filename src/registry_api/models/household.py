"""Household model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registry_api.models.base import Base, GeoAttributionMixin, TimestampMixin, UUIDMixin


class Household(Base, UUIDMixin, TimestampMixin, GeoAttributionMixin):
    """A household registered in a barangay.

    ``code`` follows the ``<barangay>-<purok>-<block>-<sequence>`` form,
    e.g. ``042114014-0000-0001-0001``.
    """

    __tablename__ = "households"

    code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    house_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    street_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    subdivision: Mapped[str | None] = mapped_column(String(200), nullable=True)

    residents = relationship("Resident", back_populates="household", passive_deletes=True)
