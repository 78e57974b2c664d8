"""Shared test fixtures: settings, async database sessions and role catalogs."""

import uuid
from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from observer_api.core.config import Settings
from observer_api.lib.roles import RoleCatalog
from observer_api.models import CurrentRole, Role
from observer_api.models.base import Base

ROLE_SLUGS = ("admin", "federal_repr", "cc", "mc", "tc", "observer")


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        sms_gateway_url="https://sms.test/send",
        sms_api_key="test-sms-key",
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
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
def roles() -> dict[str, Role]:
    """In-memory general roles keyed by slug."""
    return {slug: Role(id=uuid.uuid4(), slug=slug, name=slug.replace("_", " ").title()) for slug in ROLE_SLUGS}


@pytest.fixture
def current_roles() -> dict[str, CurrentRole]:
    """In-memory current roles: one precinct-bound, one territorial, one free."""
    return {
        "observer_uic": CurrentRole(
            id=uuid.uuid4(),
            slug="observer_uic",
            name="Observer at precinct commission",
            position=1,
            must_have_uic=True,
            must_have_tic=False,
        ),
        "tic_member": CurrentRole(
            id=uuid.uuid4(),
            slug="tic_member",
            name="Territorial commission member",
            position=2,
            must_have_uic=False,
            must_have_tic=True,
        ),
        "mobile": CurrentRole(
            id=uuid.uuid4(),
            slug="mobile",
            name="Mobile group",
            position=3,
            must_have_uic=False,
            must_have_tic=False,
        ),
    }


@pytest.fixture
def catalog(roles: dict[str, Role], current_roles: dict[str, CurrentRole]) -> RoleCatalog:
    """Role catalog over the in-memory roles."""
    return RoleCatalog(roles.values(), current_roles.values())
