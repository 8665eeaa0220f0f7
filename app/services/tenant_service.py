"""Tenant lifecycle: atomic provisioning, cascading deletion and reporting."""
from typing import List, Optional, Tuple

from sqlalchemy import select, func, delete, update, case
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import joinedload
from sqlalchemy.orm.attributes import set_committed_value

from app.core.enums import AdminLevel, TenantStatus
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.logging import get_logger
from app.core.security import check_password_length, hash_password
from app.models.admin import Admin
from app.models.platform_admin import PlatformAdmin
from app.models.tenant import Tenant
from app.models.user import User
from app.services.base import BaseService
from app.services.platform_service import validate_account_email


logger = get_logger(__name__)

# Relations joined onto tenant users; each may be missing on a partially migrated database.
USER_RELATIONS = (User.role, User.organization, User.building, User.floor)


def _is_missing_relation(exc: DBAPIError) -> bool:
    message = str(exc.orig).lower()
    return "does not exist" in message or "no such table" in message or "no such column" in message


class TenantService(BaseService):
    """Service for tenant lifecycle operations."""

    def _tenant_query(self):
        return select(Tenant).options(
            joinedload(Tenant.super_admin),
            joinedload(Tenant.created_by_platform_admin_rel),
        )

    async def list_tenants(self) -> List[Tenant]:
        result = await self.db.execute(
            self._tenant_query().order_by(Tenant.created_at.desc())
        )
        return list(result.scalars().unique().all())

    async def get_tenant(self, tenant_id: str) -> Optional[Tenant]:
        result = await self.db.execute(
            self._tenant_query().where(Tenant.id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def _code_taken(self, code: str) -> bool:
        result = await self.db.execute(select(Tenant.id).where(Tenant.code == code))
        return result.scalar_one_or_none() is not None

    async def _admin_email_taken(self, email: str) -> bool:
        result = await self.db.execute(select(Admin.id).where(Admin.email == email))
        return result.scalar_one_or_none() is not None

    async def assign_super_admin(self, tenant: Tenant, admin: Admin) -> None:
        """Point ``tenant.super_admin_id`` at ``admin``, which must be its own superadmin."""
        if admin.tenant_id != tenant.id or not admin.is_super_admin:
            raise ValidationError("Super admin must be a superadmin of the same tenant")
        tenant.super_admin = admin
        await self.db.flush()

    async def create_tenant_with_superadmin(
        self,
        tenant_name: str,
        tenant_code: str,
        superadmin_email: str,
        superadmin_first_name: str,
        superadmin_last_name: str,
        superadmin_password: str,
        created_by_platform_admin: str,
        plan_id: Optional[str] = None,
    ) -> Tuple[Tenant, Admin]:
        """Create a tenant and its superadmin in one transaction.

        Nothing is persisted unless the tenant, the superadmin and the
        tenant's super_admin_id link are all written.
        """
        tenant_code = tenant_code.strip().upper()
        superadmin_email = validate_account_email(superadmin_email)
        check_password_length(superadmin_password)

        try:
            result = await self.db.execute(
                select(PlatformAdmin).where(PlatformAdmin.id == created_by_platform_admin)
            )
            platform_admin = result.scalar_one_or_none()
            if platform_admin is None:
                raise NotFoundError("Platform admin not found")

            if await self._code_taken(tenant_code):
                raise ConflictError("Tenant with this code already exists")

            if await self._admin_email_taken(superadmin_email):
                raise ConflictError("Admin with this email already exists")

            tenant = Tenant(
                name=tenant_name,
                code=tenant_code,
                plan_id=plan_id,
                status=TenantStatus.ACTIVE,
            )
            tenant.created_by_platform_admin_rel = platform_admin
            self.db.add(tenant)
            await self.db.flush()

            superadmin = Admin(
                tenant_id=tenant.id,
                email=superadmin_email,
                first_name=superadmin_first_name,
                last_name=superadmin_last_name,
                password_hash=hash_password(superadmin_password),
                admin_level=AdminLevel.SUPER_ADMIN,
                module_scope=None,
                is_active=True,
            )
            superadmin.creator = None
            self.db.add(superadmin)
            await self.db.flush()

            await self.assign_super_admin(tenant, superadmin)
            await self.db.commit()
        except Exception as e:
            error = await self.rollback_and_translate(
                e, "Tenant code or superadmin email already exists"
            )
            if error is e:
                raise
            raise error from e

        logger.info(
            f"Tenant created: {tenant.name} ({tenant.code}) with superadmin {superadmin.email}",
            extra={
                "tenant_id": tenant.id,
                "admin_id": superadmin.id,
                "platform_admin_id": platform_admin.id,
            },
        )
        return tenant, superadmin

    async def delete_tenant(self, tenant_id: str) -> None:
        """Delete a tenant; foreign keys cascade the delete to every tenant-scoped row."""
        try:
            result = await self.db.execute(select(Tenant.id).where(Tenant.id == tenant_id))
            if result.scalar_one_or_none() is None:
                raise NotFoundError("Tenant not found")

            admin_count = await self.db.scalar(
                select(func.count(Admin.id)).where(Admin.tenant_id == tenant_id)
            )
            user_count = await self.db.scalar(
                select(func.count(User.id)).where(User.tenant_id == tenant_id)
            )
            logger.info(
                f"Deleting tenant {tenant_id} with {admin_count} admins and {user_count} users",
                extra={"tenant_id": tenant_id, "admin_count": admin_count, "user_count": user_count},
            )

            # Break the tenants <-> admins cycle before the cascade runs.
            await self.db.execute(
                update(Tenant).where(Tenant.id == tenant_id).values(super_admin_id=None)
            )
            await self.db.execute(delete(Tenant).where(Tenant.id == tenant_id))
            await self.db.commit()
        except Exception as e:
            error = await self.rollback_and_translate(e)
            if error is e:
                raise
            raise error from e

        # Drop identity-map entries for rows the database removed.
        self.db.expunge_all()
        logger.info(f"Tenant deleted: {tenant_id}", extra={"tenant_id": tenant_id})

    async def get_tenant_analytics(self) -> List[dict]:
        """Per-tenant user and admin counts; tenants without accounts report zeros."""
        users = (
            select(User.tenant_id, func.count(User.id).label("total_users"))
            .group_by(User.tenant_id)
            .subquery()
        )
        admins = (
            select(
                Admin.tenant_id,
                func.sum(case((Admin.is_super_admin.is_(False), 1), else_=0)).label("total_admins"),
                func.sum(case((Admin.is_super_admin.is_(True), 1), else_=0)).label("total_super_admins"),
            )
            .group_by(Admin.tenant_id)
            .subquery()
        )
        result = await self.db.execute(
            select(
                Tenant.id,
                Tenant.name,
                Tenant.code,
                func.coalesce(users.c.total_users, 0),
                func.coalesce(admins.c.total_admins, 0),
                func.coalesce(admins.c.total_super_admins, 0),
            )
            .outerjoin(users, users.c.tenant_id == Tenant.id)
            .outerjoin(admins, admins.c.tenant_id == Tenant.id)
            .order_by(Tenant.created_at.desc())
        )
        return [
            {
                "tenant_id": tenant_id,
                "tenant_name": name,
                "tenant_code": code,
                "total_users": int(total_users),
                "total_employees": int(total_users),
                "total_admins": int(total_admins),
                "total_super_admins": int(total_super_admins),
            }
            for tenant_id, name, code, total_users, total_admins, total_super_admins in result.all()
        ]

    async def get_tenant_users(self, tenant_id: str) -> List[User]:
        """List a tenant's users, falling back to bare rows if a joined table is missing."""
        result = await self.db.execute(select(Tenant.id).where(Tenant.id == tenant_id))
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Tenant not found")

        query = (
            select(User)
            .where(User.tenant_id == tenant_id)
            .order_by(User.created_at.desc())
        )
        try:
            result = await self.db.execute(
                query.options(*(joinedload(rel) for rel in USER_RELATIONS))
            )
            return list(result.scalars().all())
        except DBAPIError as e:
            if not _is_missing_relation(e):
                raise
            await self.db.rollback()
            logger.warning(
                f"Related tables unavailable, listing users without relations: {e.orig}",
                extra={"tenant_id": tenant_id},
            )

        result = await self.db.execute(query)
        users = list(result.scalars().all())
        # Mark relations loaded as empty so serialization never lazy-loads them.
        for user in users:
            for rel in USER_RELATIONS:
                set_committed_value(user, rel.key, None)
        return users
