"""Shared test fixtures for async database, sessions, profiles, and auth tokens."""

import uuid
from collections.abc import AsyncGenerator, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from registry_api.core.config import Settings
from registry_api.core.security import create_access_token
from registry_api.models.base import Base
from registry_api.models.user_profile import UserProfile

# Barangay 042114014 sits in city 042114, province 0421, region 04
BARANGAY_CODES = {
    "barangay_code": "042114014",
    "city_municipality_code": "042114",
    "province_code": "0421",
    "region_code": "04",
}


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key="test-secret-key-not-for-production",
        jwt_algorithm="HS256",
        jwt_access_token_expire_minutes=30,
    )


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_profile(async_session: AsyncSession) -> Callable[..., object]:
    """Factory persisting a UserProfile; geography defaults to barangay 042114014."""

    async def _make(role: str = "barangay_admin", **overrides: object) -> UserProfile:
        fields: dict[str, object] = {
            "id": uuid.uuid4(),
            "email": f"{uuid.uuid4().hex[:8]}@registry.gov.ph",
            "first_name": "Maria",
            "last_name": "Santos",
            "role": role,
            "is_active": True,
            **BARANGAY_CODES,
        }
        fields.update(overrides)
        profile = UserProfile(**fields)
        async_session.add(profile)
        await async_session.commit()
        await async_session.refresh(profile)
        return profile

    return _make


@pytest.fixture
def token_for(settings: Settings) -> Callable[[object], str]:
    """Mint a bearer token whose subject is the given principal id."""

    def _token(principal_id: object) -> str:
        return create_access_token(
            str(principal_id),
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )

    return _token
