"""Unified login for superadmins and admins (one table, one entry point)."""
from typing import Tuple

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from app.core.exceptions import ForbiddenError, InvalidCredentialsError
from app.core.logging import get_logger
from app.core.security import Principal, dummy_verify, verify_password
from app.models.admin import Admin
from app.models.tenant import Tenant
from app.services.base import BaseService
from app.services.platform_service import normalize_email


logger = get_logger(__name__)


class AdminAuthService(BaseService):

    async def login(self, email: str, password: str) -> Tuple[Admin, Tenant]:
        """Resolve an admin by credentials.

        Unknown email, wrong password and inactive account all fail the same
        way so the response does not reveal which accounts exist.
        """
        email = normalize_email(email)
        result = await self.db.execute(
            select(Admin).options(joinedload(Admin.tenant)).where(Admin.email == email)
        )
        admin = result.scalar_one_or_none()

        if admin is None:
            dummy_verify()
            logger.warning(f"Failed admin login attempt for email: {email}")
            raise InvalidCredentialsError()

        if not verify_password(password, admin.password_hash):
            logger.warning(
                f"Failed admin login attempt for email: {email}",
                extra={"admin_id": admin.id, "tenant_id": admin.tenant_id},
            )
            raise InvalidCredentialsError()

        if not admin.is_active:
            logger.warning(
                f"Login attempt on inactive admin account: {email}",
                extra={"admin_id": admin.id, "tenant_id": admin.tenant_id},
            )
            raise InvalidCredentialsError()

        if admin.tenant is None:
            logger.error(
                f"Admin {email} is not associated with a tenant",
                extra={"admin_id": admin.id},
            )
            raise ForbiddenError("Admin is not associated with a tenant")

        principal_type = admin.principal_type
        logger.info(
            f"{principal_type.value} logged in: {admin.email}, tenant: {admin.tenant.code}",
            extra={
                "admin_id": admin.id,
                "tenant_id": admin.tenant_id,
                "principal_type": principal_type.value,
            },
        )
        return admin, admin.tenant


def principal_for_admin(admin: Admin) -> Principal:
    """Token principal for an admin; the type follows ``is_super_admin``."""
    return Principal(
        id=admin.id,
        email=admin.email,
        type=admin.principal_type,
        tenant_id=admin.tenant_id,
    )
