"""UserProfile model: role, activation, and jurisdiction of a principal."""

import uuid

from sqlalchemy import Boolean, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from registry_api.models.base import Base, GeoAttributionMixin, TimestampMixin


class UserProfile(Base, TimestampMixin, GeoAttributionMixin):
    """Profile of an identity-provider principal.

    The primary key is the identity provider's subject id, not generated here.
    ``access_level`` overrides the role's default level when set (e.g. a
    national-level analyst holding a regional role).
    """

    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    access_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
