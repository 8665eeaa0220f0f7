"""Schema invariants declared on the ORM models."""
import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import Base
from app.core.enums import AdminLevel
from app.models.admin import Admin
from app.models.user import User


def test_every_tenant_reference_cascades():
    tenant_scoped = []
    for table in Base.metadata.tables.values():
        for fk in table.foreign_keys:
            if fk.column.table.name == "tenants" and fk.parent.name == "tenant_id":
                tenant_scoped.append(table.name)
                assert fk.ondelete == "CASCADE", table.name

    assert {"admins", "users", "admin_assignments", "admin_permissions"} <= set(tenant_scoped)


def test_admin_references_point_at_admins():
    expected = {
        ("tenants", "super_admin_id"): "SET NULL",
        ("admin_assignments", "admin_id"): "CASCADE",
        ("admin_assignments", "created_by"): "SET NULL",
        ("admin_onboarding_requests", "admin_id"): "SET NULL",
        ("admin_onboarding_requests", "approved_by"): "SET NULL",
        ("admin_onboarding_requests", "created_by"): "SET NULL",
        ("admin_permissions", "admin_id"): "CASCADE",
        ("admin_permissions", "granted_by"): "SET NULL",
    }
    for (table, column), rule in expected.items():
        (fk,) = Base.metadata.tables[table].c[column].foreign_keys
        assert fk.column.table.name == "admins", f"{table}.{column}"
        assert fk.ondelete == rule, f"{table}.{column}"


def test_user_scope_is_normalized():
    user = User(first_name="Eve", last_name="Emp", email="eve@acme.example.com", module_scope="sangrah")

    assert user.module_scope == "SANGRAH"


@pytest.mark.asyncio
async def test_check_constraint_rejects_scoped_superadmin(db_session: AsyncSession, acme):
    tenant, _ = acme
    admin = Admin(
        tenant_id=tenant.id,
        email="bad@acme.example.com",
        first_name="Bad",
        last_name="Shape",
        password_hash="x",
        admin_level=AdminLevel.SUPER_ADMIN,
        module_scope="DWAR",
    )
    db_session.add(admin)

    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()


@pytest.mark.asyncio
async def test_check_constraint_rejects_unscoped_admin(db_session: AsyncSession, acme):
    tenant, _ = acme
    db_session.add(Admin(
        tenant_id=tenant.id,
        email="bare@acme.example.com",
        first_name="Bare",
        last_name="Admin",
        password_hash="x",
        admin_level=AdminLevel.ADMIN,
    ))

    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()


@pytest.mark.asyncio
async def test_user_scope_defaults_to_core(db_session: AsyncSession, acme):
    tenant, _ = acme
    db_session.add(User(tenant_id=tenant.id, first_name="Eve", last_name="Emp", email="eve@acme.example.com"))
    await db_session.commit()

    user = await db_session.scalar(select(User).where(User.email == "eve@acme.example.com"))
    assert user.module_scope == "CORE"
