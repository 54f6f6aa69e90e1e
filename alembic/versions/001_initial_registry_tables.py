"""Initial migration: user_profiles, households, and residents tables.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_GEO_COLUMNS = ("barangay_code", "city_municipality_code", "province_code", "region_code")


def _geo_columns() -> list[sa.Column]:
    return [sa.Column(name, sa.String(10), nullable=True) for name in _GEO_COLUMNS]


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _create_geo_indexes(table: str) -> None:
    for name in _GEO_COLUMNS:
        op.create_index(f"ix_{table}_{name}", table, [name])


def upgrade() -> None:
    # Profiles keyed by identity-provider subject id
    op.create_table(
        "user_profiles",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("role", sa.String(30), nullable=False),
        sa.Column("access_level", sa.String(20), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        *_geo_columns(),
        *_timestamp_columns(),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"], unique=True)
    op.create_index("ix_user_profiles_role", "user_profiles", ["role"])
    _create_geo_indexes("user_profiles")

    op.create_table(
        "households",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(32), nullable=False),
        sa.Column("house_number", sa.String(50), nullable=True),
        sa.Column("street_name", sa.String(200), nullable=True),
        sa.Column("subdivision", sa.String(200), nullable=True),
        *_geo_columns(),
        *_timestamp_columns(),
    )
    op.create_index("ix_households_code", "households", ["code"], unique=True)
    _create_geo_indexes("households")

    op.create_table(
        "residents",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("middle_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("birthdate", sa.Date, nullable=True),
        sa.Column("sex", sa.String(10), nullable=True),
        sa.Column("civil_status", sa.String(20), nullable=True),
        sa.Column(
            "household_id",
            UUID(as_uuid=True),
            sa.ForeignKey("households.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_geo_columns(),
        *_timestamp_columns(),
    )
    op.create_index("ix_residents_last_name", "residents", ["last_name"])
    op.create_index("ix_residents_household_id", "residents", ["household_id"])
    _create_geo_indexes("residents")


def downgrade() -> None:
    op.drop_table("residents")
    op.drop_table("households")
    op.drop_table("user_profiles")
