"""Admin lifecycle service tests."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import AdminLevel, PrincipalType
from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from app.models.admin import Admin
from app.services.admin_auth_service import AdminAuthService, principal_for_admin
from app.services.admin_service import AdminService


def admin_fields(**overrides) -> dict:
    fields = {
        "email": "gate@acme.example.com",
        "first_name": "Gita",
        "last_name": "Gate",
        "password": "admin-pass-123",
        "module_scope": "dwar",
    }
    fields.update(overrides)
    return fields


@pytest.mark.asyncio
async def test_create_admin_in_superadmin_tenant(db_session: AsyncSession, acme):
    tenant, superadmin = acme

    admin = await AdminService(db_session).create_admin(
        tenant_id=tenant.id, created_by=superadmin.id, **admin_fields()
    )

    assert admin.tenant_id == tenant.id
    assert admin.module_scope == "DWAR"
    assert admin.admin_level is AdminLevel.ADMIN
    assert admin.is_super_admin is False
    assert admin.created_by == superadmin.id
    assert admin.is_active is True


@pytest.mark.asyncio
@pytest.mark.parametrize("scope", ["CORE", "HR", ""])
async def test_create_admin_invalid_scope(db_session: AsyncSession, acme, scope):
    tenant, superadmin = acme

    with pytest.raises(ValidationError, match="Invalid module_scope"):
        await AdminService(db_session).create_admin(
            tenant_id=tenant.id, created_by=superadmin.id, **admin_fields(module_scope=scope)
        )


@pytest.mark.asyncio
async def test_create_admin_short_password(db_session: AsyncSession, acme):
    tenant, superadmin = acme

    with pytest.raises(ValidationError, match="Password"):
        await AdminService(db_session).create_admin(
            tenant_id=tenant.id, created_by=superadmin.id, **admin_fields(password="short")
        )


@pytest.mark.asyncio
async def test_create_admin_rejects_reserved_domain(db_session: AsyncSession, acme):
    tenant, superadmin = acme

    with pytest.raises(ValidationError, match="Invalid email address"):
        await AdminService(db_session).create_admin(
            tenant_id=tenant.id, created_by=superadmin.id, **admin_fields(email="ops@corp.local")
        )

    assert await db_session.scalar(select(func.count()).select_from(Admin).where(Admin.email == "ops@corp.local")) == 0


@pytest.mark.asyncio
async def test_create_admin_duplicate_email(db_session: AsyncSession, acme):
    tenant, superadmin = acme
    service = AdminService(db_session)
    await service.create_admin(tenant_id=tenant.id, created_by=superadmin.id, **admin_fields())

    with pytest.raises(ConflictError):
        await service.create_admin(
            tenant_id=tenant.id, created_by=superadmin.id, **admin_fields(email="GATE@acme.example.com")
        )


@pytest.mark.asyncio
async def test_duplicate_email_race_settled_by_constraint(db_session: AsyncSession, acme, monkeypatch):
    tenant, superadmin = acme
    service = AdminService(db_session)

    async def not_taken(email):
        return False

    # Both requests pass the pre-check; the unique index decides.
    monkeypatch.setattr(service, "_email_taken", not_taken)
    await service.create_admin(tenant_id=tenant.id, created_by=superadmin.id, **admin_fields())

    with pytest.raises(ConflictError):
        await service.create_admin(tenant_id=tenant.id, created_by=superadmin.id, **admin_fields())

    total = await db_session.scalar(
        select(func.count()).select_from(Admin).where(Admin.email == "gate@acme.example.com")
    )
    assert total == 1


@pytest.mark.asyncio
async def test_create_admin_requires_active_superadmin(db_session: AsyncSession, acme, scoped_admin):
    tenant, superadmin = acme
    service = AdminService(db_session)

    with pytest.raises(ForbiddenError):
        await service.create_admin(
            tenant_id=tenant.id, created_by=scoped_admin.id, **admin_fields(email="x@acme.example.com")
        )

    superadmin.is_active = False
    await db_session.commit()
    with pytest.raises(ForbiddenError):
        await service.create_admin(
            tenant_id=tenant.id, created_by=superadmin.id, **admin_fields(email="y@acme.example.com")
        )


@pytest.mark.asyncio
async def test_create_admin_in_other_tenant_denied(db_session: AsyncSession, acme, tenant_factory):
    tenant, superadmin = acme
    globex, _ = await tenant_factory("GLOBEX", "boss@globex.example.com")

    with pytest.raises(ForbiddenError):
        await AdminService(db_session).create_admin(
            tenant_id=globex.id, created_by=superadmin.id, **admin_fields()
        )


@pytest.mark.asyncio
async def test_list_tenant_admins_filters(db_session: AsyncSession, acme, scoped_admin):
    tenant, superadmin = acme
    service = AdminService(db_session)
    other = await service.create_admin(
        tenant_id=tenant.id,
        created_by=superadmin.id,
        **admin_fields(email="store@acme.example.com", module_scope="SANGRAH"),
    )
    await service.update_admin(other.id, tenant.id, is_active=False)

    assert {a.email for a in await service.list_tenant_admins(tenant.id)} == {
        "gate@acme.example.com", "store@acme.example.com",
    }
    with_super = await service.list_tenant_admins(tenant.id, include_superadmin=True)
    assert superadmin.id in {a.id for a in with_super}

    by_scope = await service.list_tenant_admins(tenant.id, module_scope="dwar")
    assert [a.email for a in by_scope] == ["gate@acme.example.com"]

    inactive = await service.list_tenant_admins(tenant.id, is_active=False)
    assert [a.email for a in inactive] == ["store@acme.example.com"]


@pytest.mark.asyncio
async def test_list_is_tenant_isolated(db_session: AsyncSession, acme, scoped_admin, tenant_factory):
    globex, _ = await tenant_factory("GLOBEX", "boss@globex.example.com")

    admins = await AdminService(db_session).list_tenant_admins(globex.id, include_superadmin=True)

    assert [a.email for a in admins] == ["boss@globex.example.com"]


@pytest.mark.asyncio
async def test_update_admin(db_session: AsyncSession, acme, scoped_admin):
    tenant, _ = acme

    updated = await AdminService(db_session).update_admin(
        scoped_admin.id, tenant.id, first_name="Gina", module_scope="sandesh", last_name=None,
    )

    assert updated.first_name == "Gina"
    assert updated.last_name == "Gate"
    assert updated.module_scope == "SANDESH"


@pytest.mark.asyncio
async def test_update_admin_invalid_scope(db_session: AsyncSession, acme, scoped_admin):
    tenant, _ = acme

    with pytest.raises(ValidationError):
        await AdminService(db_session).update_admin(scoped_admin.id, tenant.id, module_scope="CORE")


@pytest.mark.asyncio
async def test_superadmin_cannot_be_managed(db_session: AsyncSession, acme):
    tenant, superadmin = acme
    service = AdminService(db_session)

    with pytest.raises(ForbiddenError, match="update superadmin"):
        await service.update_admin(superadmin.id, tenant.id, is_active=False)
    with pytest.raises(ForbiddenError, match="delete superadmin"):
        await service.delete_admin(superadmin.id, tenant.id)


@pytest.mark.asyncio
async def test_admin_of_other_tenant_not_found(db_session: AsyncSession, scoped_admin, tenant_factory):
    globex, _ = await tenant_factory("GLOBEX", "boss@globex.example.com")
    service = AdminService(db_session)

    assert await service.get_admin(scoped_admin.id, globex.id) is None
    with pytest.raises(NotFoundError, match="not found in your tenant"):
        await service.update_admin(scoped_admin.id, globex.id, first_name="X")
    with pytest.raises(NotFoundError):
        await service.delete_admin(scoped_admin.id, globex.id)


@pytest.mark.asyncio
async def test_delete_admin(db_session: AsyncSession, acme, scoped_admin):
    tenant, _ = acme
    service = AdminService(db_session)
    admin_id = scoped_admin.id

    await service.delete_admin(admin_id, tenant.id)

    assert await service.get_admin(admin_id) is None


@pytest.mark.asyncio
async def test_login_as_superadmin_and_admin(db_session: AsyncSession, acme, scoped_admin):
    tenant, superadmin = acme
    service = AdminAuthService(db_session)

    boss, boss_tenant = await service.login("BOSS@acme.example.com", "superadmin-pass-123")
    assert boss.id == superadmin.id
    assert boss_tenant.id == tenant.id
    assert principal_for_admin(boss).type is PrincipalType.SUPER_ADMIN

    gate, _ = await service.login("gate@acme.example.com", "admin-pass-123")
    principal = principal_for_admin(gate)
    assert principal.type is PrincipalType.ADMIN
    assert principal.tenant_id == tenant.id


@pytest.mark.asyncio
async def test_login_rejections_are_generic(db_session: AsyncSession, scoped_admin):
    service = AdminAuthService(db_session)

    with pytest.raises(InvalidCredentialsError):
        await service.login("gate@acme.example.com", "wrong-password")
    with pytest.raises(InvalidCredentialsError):
        await service.login("nobody@acme.example.com", "admin-pass-123")

    scoped_admin.is_active = False
    await db_session.commit()
    with pytest.raises(InvalidCredentialsError):
        await service.login("gate@acme.example.com", "admin-pass-123")


def test_level_and_flag_stay_in_sync():
    admin = Admin(admin_level=AdminLevel.SUPER_ADMIN)
    assert admin.is_super_admin is True

    admin.admin_level = "ADMIN"
    assert admin.admin_level is AdminLevel.ADMIN
    assert admin.is_super_admin is False


def test_admin_scope_validated_on_assignment():
    admin = Admin(admin_level=AdminLevel.ADMIN, module_scope="fresh_serve")
    assert admin.module_scope == "FRESH_SERVE"

    with pytest.raises(ValidationError):
        admin.module_scope = "CORE"
