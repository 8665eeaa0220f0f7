"""Platform admin service tests."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import PrincipalType
from app.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.models.platform_admin import PlatformAdmin
from app.services.platform_service import PlatformService


@pytest.mark.asyncio
async def test_create_platform_admin_records_creator(db_session: AsyncSession, platform_admin: PlatformAdmin):
    created = await PlatformService(db_session).create_platform_admin(
        email="  Second@Platform.EXAMPLE.COM ",
        first_name="Second",
        last_name="Owner",
        password="second-pass-123",
        created_by=platform_admin.id,
    )

    assert created.email == "second@platform.example.com"
    assert created.created_by == platform_admin.id
    assert created.password_hash != "second-pass-123"


@pytest.mark.asyncio
async def test_create_platform_admin_duplicate_email(db_session: AsyncSession, platform_admin: PlatformAdmin):
    with pytest.raises(ConflictError):
        await PlatformService(db_session).create_platform_admin(
            email="OWNER@platform.example.com",
            first_name="Dup",
            last_name="Owner",
            password="dup-pass-1234",
        )


@pytest.mark.asyncio
async def test_create_platform_admin_unknown_creator(db_session: AsyncSession):
    with pytest.raises(NotFoundError):
        await PlatformService(db_session).create_platform_admin(
            email="new@platform.example.com",
            first_name="New",
            last_name="Owner",
            password="new-pass-1234",
            created_by="missing",
        )


@pytest.mark.asyncio
async def test_create_platform_admin_short_password(db_session: AsyncSession):
    with pytest.raises(ValidationError):
        await PlatformService(db_session).create_platform_admin(
            email="new@platform.example.com",
            first_name="New",
            last_name="Owner",
            password="short",
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["ops@corp.local", "owner@platform.test", "not-an-email"])
async def test_create_platform_admin_rejects_invalid_email(db_session: AsyncSession, email):
    with pytest.raises(ValidationError, match="Invalid email address"):
        await PlatformService(db_session).create_platform_admin(
            email=email,
            first_name="New",
            last_name="Owner",
            password="new-pass-1234",
        )

    assert await PlatformService(db_session).list_platform_admins() == []


@pytest.mark.asyncio
async def test_get_active_platform_admin(db_session: AsyncSession, platform_admin: PlatformAdmin):
    service = PlatformService(db_session)
    assert (await service.get_active_platform_admin(platform_admin.id)).id == platform_admin.id

    platform_admin.is_active = False
    await db_session.commit()

    with pytest.raises(UnauthorizedError):
        await service.get_active_platform_admin(platform_admin.id)
    with pytest.raises(UnauthorizedError):
        await service.get_active_platform_admin("missing")


@pytest.mark.asyncio
async def test_list_platform_admins_newest_first(db_session: AsyncSession, platform_admin: PlatformAdmin):
    service = PlatformService(db_session)
    second = await service.create_platform_admin(
        email="second@platform.example.com",
        first_name="Second",
        last_name="Owner",
        password="second-pass-123",
        created_by=platform_admin.id,
    )

    accounts = await service.list_platform_admins()

    assert [a.id for a in accounts] == [second.id, platform_admin.id]
    assert accounts[0].creator.email == platform_admin.email


@pytest.mark.asyncio
async def test_login_returns_platform_principal(db_session: AsyncSession, platform_admin: PlatformAdmin):
    principal = await PlatformService(db_session).login("owner@platform.example.com", "platform-pass-123")

    assert principal.id == platform_admin.id
    assert principal.type is PrincipalType.PLATFORM_ADMIN
    assert principal.tenant_id is None


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(db_session: AsyncSession, platform_admin: PlatformAdmin):
    service = PlatformService(db_session)

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        await service.login("owner@platform.example.com", "nope-nope-nope")
    with pytest.raises(InvalidCredentialsError) as unknown:
        await service.login("ghost@platform.example.com", "platform-pass-123")

    platform_admin.is_active = False
    await db_session.commit()
    with pytest.raises(InvalidCredentialsError) as inactive:
        await service.login("owner@platform.example.com", "platform-pass-123")

    assert wrong_password.value.message == unknown.value.message == inactive.value.message
