"""Platform admin account management and login."""
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.core.enums import PrincipalType
from app.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.core.logging import get_logger
from app.core.security import (
    Principal,
    check_password_length,
    dummy_verify,
    hash_password,
    verify_password,
)
from app.models.platform_admin import PlatformAdmin
from app.services.base import BaseService


logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_account_email(email: str) -> str:
    """Normalized email for a new account; rejects addresses EmailStr would reject."""
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(f"Invalid email address: {e}") from e
    return normalize_email(email)


class PlatformService(BaseService):
    """Top-of-hierarchy account management."""

    async def _email_taken(self, email: str) -> bool:
        result = await self.db.execute(
            select(PlatformAdmin.id).where(PlatformAdmin.email == email)
        )
        return result.scalar_one_or_none() is not None

    async def create_platform_admin(
        self,
        email: str,
        first_name: str,
        last_name: str,
        password: str,
        created_by: Optional[str] = None,
    ) -> PlatformAdmin:
        email = validate_account_email(email)
        check_password_length(password)

        creator = None
        if created_by is not None:
            creator = await self.get_platform_admin(created_by)
            if creator is None:
                raise NotFoundError("Creating platform admin not found")

        if await self._email_taken(email):
            raise ConflictError("Platform admin with this email already exists")

        platform_admin = PlatformAdmin(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
            is_active=True,
        )
        platform_admin.creator = creator
        self.db.add(platform_admin)
        await self.commit("Platform admin with this email already exists")

        logger.info(
            f"Platform admin created: {platform_admin.email}",
            extra={"platform_admin_id": platform_admin.id},
        )
        return platform_admin

    async def list_platform_admins(self) -> List[PlatformAdmin]:
        result = await self.db.execute(
            select(PlatformAdmin)
            .options(selectinload(PlatformAdmin.creator))
            .order_by(PlatformAdmin.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_platform_admin(self, platform_admin_id: str) -> Optional[PlatformAdmin]:
        result = await self.db.execute(
            select(PlatformAdmin)
            .options(selectinload(PlatformAdmin.creator))
            .where(PlatformAdmin.id == platform_admin_id)
        )
        return result.scalar_one_or_none()

    async def get_active_platform_admin(self, platform_admin_id: str) -> PlatformAdmin:
        """The calling platform admin, which must still exist and be active."""
        result = await self.db.execute(
            select(PlatformAdmin).where(
                PlatformAdmin.id == platform_admin_id,
                PlatformAdmin.is_active.is_(True),
            )
        )
        platform_admin = result.scalar_one_or_none()
        if platform_admin is None:
            logger.warning(
                "Rejected token of inactive or deleted platform admin",
                extra={"platform_admin_id": platform_admin_id},
            )
            raise UnauthorizedError("Platform admin account is inactive or no longer exists")
        return platform_admin

    async def authenticate(self, email: str, password: str) -> PlatformAdmin:
        """Resolve an active platform admin by credentials."""
        email = normalize_email(email)
        result = await self.db.execute(
            select(PlatformAdmin).where(PlatformAdmin.email == email)
        )
        platform_admin = result.scalar_one_or_none()

        if platform_admin is None:
            dummy_verify()
            logger.warning(f"Failed platform login attempt for email: {email}")
            raise InvalidCredentialsError()

        if not verify_password(password, platform_admin.password_hash) or not platform_admin.is_active:
            logger.warning(
                f"Failed platform login attempt for email: {email}",
                extra={"platform_admin_id": platform_admin.id},
            )
            raise InvalidCredentialsError()

        logger.info(
            f"Platform admin logged in: {platform_admin.email}",
            extra={"platform_admin_id": platform_admin.id, "principal_type": "platform_admin"},
        )
        return platform_admin

    async def login(self, email: str, password: str) -> Principal:
        platform_admin = await self.authenticate(email, password)
        return principal_for_platform_admin(platform_admin)


def principal_for_platform_admin(platform_admin: PlatformAdmin) -> Principal:
    return Principal(
        id=platform_admin.id,
        email=platform_admin.email,
        type=PrincipalType.PLATFORM_ADMIN,
        tenant_id=None,
    )
