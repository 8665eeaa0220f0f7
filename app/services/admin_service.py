"""Admin lifecycle within a tenant, driven by the tenant's superadmin."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.core.enums import ADMIN_MODULE_SCOPES, AdminLevel, normalize_module_scope
from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError
from app.core.logging import get_logger
from app.core.security import check_password_length, hash_password
from app.models.admin import Admin
from app.services.base import BaseService
from app.services.platform_service import validate_account_email


logger = get_logger(__name__)

UPDATABLE_FIELDS = ("first_name", "last_name", "module_scope", "is_active")


class AdminService(BaseService):
    """Create, list, update and delete admins of one tenant."""

    async def _email_taken(self, email: str) -> bool:
        result = await self.db.execute(select(Admin.id).where(Admin.email == email))
        return result.scalar_one_or_none() is not None

    async def get_active_super_admin(self, admin_id: str, tenant_id: str) -> Admin:
        """The acting superadmin, which must still be active and in ``tenant_id``."""
        result = await self.db.execute(
            select(Admin).where(
                Admin.id == admin_id,
                Admin.tenant_id == tenant_id,
                Admin.is_super_admin.is_(True),
                Admin.is_active.is_(True),
            )
        )
        admin = result.scalar_one_or_none()
        if admin is None:
            raise ForbiddenError("Only an active superadmin of this tenant can manage admins")
        return admin

    async def create_admin(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        module_scope: str,
        tenant_id: str,
        created_by: str,
    ) -> Admin:
        scope = normalize_module_scope(module_scope, ADMIN_MODULE_SCOPES)
        check_password_length(password)
        email = validate_account_email(email)

        creator = await self.get_active_super_admin(created_by, tenant_id)

        if await self._email_taken(email):
            raise ConflictError("Admin with this email already exists")

        admin = Admin(
            tenant_id=tenant_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
            admin_level=AdminLevel.ADMIN,
            module_scope=scope.value,
            is_active=True,
        )
        admin.creator = creator
        self.db.add(admin)
        await self.commit("Admin with this email already exists")

        logger.info(
            f"Admin created: {admin.email} (scope {admin.module_scope}) by {creator.email}",
            extra={"tenant_id": tenant_id, "admin_id": admin.id},
        )
        return admin

    async def list_tenant_admins(
        self,
        tenant_id: str,
        include_superadmin: bool = False,
        module_scope: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> List[Admin]:
        query = (
            select(Admin)
            .options(selectinload(Admin.creator))
            .where(Admin.tenant_id == tenant_id)
        )
        if not include_superadmin:
            query = query.where(Admin.is_super_admin.is_(False))
        if module_scope:
            query = query.where(Admin.module_scope == module_scope.strip().upper())
        if is_active is not None:
            query = query.where(Admin.is_active.is_(is_active))

        result = await self.db.execute(query.order_by(Admin.created_at.desc()))
        return list(result.scalars().all())

    async def get_admin(self, admin_id: str, tenant_id: Optional[str] = None) -> Optional[Admin]:
        """Point lookup; with ``tenant_id`` an admin of another tenant is not returned."""
        query = (
            select(Admin)
            .options(selectinload(Admin.creator))
            .where(Admin.id == admin_id)
        )
        if tenant_id is not None:
            query = query.where(Admin.tenant_id == tenant_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def _get_manageable_admin(self, admin_id: str, tenant_id: str, action: str) -> Admin:
        admin = await self.get_admin(admin_id, tenant_id)
        if admin is None:
            raise NotFoundError("Admin not found in your tenant")
        if admin.is_super_admin:
            raise ForbiddenError(f"Cannot {action} superadmin through this endpoint")
        return admin

    async def update_admin(self, admin_id: str, tenant_id: str, **changes) -> Admin:
        """Apply the non-None values in ``changes`` (first_name, last_name, module_scope, is_active)."""
        admin = await self._get_manageable_admin(admin_id, tenant_id, "update")

        updates = {
            key: value for key, value in changes.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if "module_scope" in updates:
            updates["module_scope"] = normalize_module_scope(
                updates["module_scope"], ADMIN_MODULE_SCOPES
            ).value

        for key, value in updates.items():
            setattr(admin, key, value)
        await self.commit()
        await self.db.refresh(admin, attribute_names=["updated_at"])

        logger.info(
            f"Admin updated: {admin.email} ({', '.join(sorted(updates)) or 'no changes'})",
            extra={"tenant_id": tenant_id, "admin_id": admin.id},
        )
        return admin

    async def delete_admin(self, admin_id: str, tenant_id: str) -> None:
        """Hard-delete a non-superadmin; its assignments and permissions cascade."""
        admin = await self._get_manageable_admin(admin_id, tenant_id, "delete")
        email = admin.email

        await self.db.delete(admin)
        await self.commit()

        logger.info(
            f"Admin deleted: {email}",
            extra={"tenant_id": tenant_id, "admin_id": admin_id},
        )
