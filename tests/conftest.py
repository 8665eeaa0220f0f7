"""Test configuration and fixtures."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, enable_sqlite_foreign_keys, get_db
from app.core.enums import AdminLevel, PrincipalType
from app.core.security import Principal, create_access_token, hash_password
from app.models.admin import Admin
from app.models.platform_admin import PlatformAdmin
from app.services.tenant_service import TenantService


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PLATFORM_PASSWORD = "platform-pass-123"
SUPERADMIN_PASSWORD = "superadmin-pass-123"
ADMIN_PASSWORD = "admin-pass-123"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with foreign keys enforced."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine.sync_engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests."""
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def bearer(principal: Principal) -> dict:
    """Authorization header for ``principal``."""
    return {"Authorization": f"Bearer {create_access_token(principal)}"}


@pytest_asyncio.fixture
async def platform_admin(db_session: AsyncSession) -> PlatformAdmin:
    """Create the bootstrap platform admin."""
    account = PlatformAdmin(
        email="owner@platform.example.com",
        first_name="Plat",
        last_name="Owner",
        password_hash=hash_password(PLATFORM_PASSWORD),
        is_active=True,
    )
    db_session.add(account)
    await db_session.commit()
    return account


@pytest_asyncio.fixture
async def platform_headers(platform_admin: PlatformAdmin) -> dict:
    return bearer(Principal(
        id=platform_admin.id,
        email=platform_admin.email,
        type=PrincipalType.PLATFORM_ADMIN,
    ))


@pytest_asyncio.fixture
async def tenant_factory(db_session: AsyncSession, platform_admin: PlatformAdmin) -> Callable:
    """Create tenants with a superadmin through the tenant service."""
    async def create(code: str = "ACME", email: str = "boss@acme.example.com"):
        return await TenantService(db_session).create_tenant_with_superadmin(
            tenant_name=f"{code.title()} Corp",
            tenant_code=code,
            superadmin_email=email,
            superadmin_first_name="Sam",
            superadmin_last_name="Boss",
            superadmin_password=SUPERADMIN_PASSWORD,
            created_by_platform_admin=platform_admin.id,
        )
    return create


@pytest_asyncio.fixture
async def acme(tenant_factory) -> tuple:
    """Tenant ACME and its superadmin."""
    return await tenant_factory()


@pytest_asyncio.fixture
async def superadmin_headers(acme: tuple) -> dict:
    tenant, superadmin = acme
    return bearer(Principal(
        id=superadmin.id,
        email=superadmin.email,
        type=PrincipalType.SUPER_ADMIN,
        tenant_id=tenant.id,
    ))


@pytest_asyncio.fixture
async def scoped_admin(db_session: AsyncSession, acme: tuple) -> Admin:
    """A DWAR admin created by the ACME superadmin."""
    tenant, superadmin = acme
    admin = Admin(
        tenant_id=tenant.id,
        email="gate@acme.example.com",
        first_name="Gita",
        last_name="Gate",
        password_hash=hash_password(ADMIN_PASSWORD),
        admin_level=AdminLevel.ADMIN,
        module_scope="DWAR",
        is_active=True,
    )
    admin.creator = superadmin
    db_session.add(admin)
    await db_session.commit()
    return admin


@pytest_asyncio.fixture
async def admin_headers(scoped_admin: Admin) -> dict:
    return bearer(Principal(
        id=scoped_admin.id,
        email=scoped_admin.email,
        type=PrincipalType.ADMIN,
        tenant_id=scoped_admin.tenant_id,
    ))


@pytest.fixture
def auth_header() -> Callable:
    """Build an Authorization header for an arbitrary principal."""
    return bearer
