"""Admin model unifying tenant superadmins and module-scoped admins."""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import (
    String, Boolean, DateTime, ForeignKey, Enum as SQLEnum, Index, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
import uuid

from app.core.database import Base
from app.core.enums import (
    ADMIN_MODULE_SCOPES,
    AdminLevel,
    PrincipalType,
    normalize_module_scope,
)


# A superadmin has no module scope; every other admin has exactly one.
ADMIN_LEVEL_SCOPE_CHECK = (
    "(admin_level = 'SUPER_ADMIN' AND is_super_admin AND module_scope IS NULL) OR "
    "(admin_level = 'ADMIN' AND NOT is_super_admin AND module_scope IS NOT NULL)"
)


class Admin(Base):
    """Tenant admin account.

    ``admin_level`` is authoritative; ``is_super_admin`` mirrors it for filtering
    and is only ever written by the level validator. Superadmins carry no
    module scope (they reach every module); regular admins must carry one.
    """

    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True
    )
    email: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str] = mapped_column(String(80), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    admin_level: Mapped[AdminLevel] = mapped_column(
        SQLEnum(AdminLevel, native_enum=False, length=20),
        default=AdminLevel.ADMIN,
        nullable=False
    )
    is_super_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    module_scope: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("admins.id", ondelete="SET NULL"),
        nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False
    )

    # Relationships
    tenant = relationship("Tenant", back_populates="admins", foreign_keys=[tenant_id])
    user = relationship("User", foreign_keys=[user_id])
    creator = relationship("Admin", remote_side=[id], foreign_keys=[created_by])
    assignments = relationship(
        "AdminAssignment",
        back_populates="admin",
        foreign_keys="AdminAssignment.admin_id",
        passive_deletes=True,
    )
    permissions = relationship(
        "AdminPermission",
        back_populates="admin",
        foreign_keys="AdminPermission.admin_id",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(ADMIN_LEVEL_SCOPE_CHECK, name="level_scope"),
        Index("ix_admins_tenant_super", "tenant_id", "is_super_admin"),
        Index("ix_admins_tenant_scope", "tenant_id", "module_scope"),
    )

    @validates("admin_level")
    def _sync_super_flag(self, key, value):
        level = AdminLevel(value)
        self.is_super_admin = level is AdminLevel.SUPER_ADMIN
        return level

    @validates("module_scope")
    def _validate_module_scope(self, key, value):
        if value is None:
            return None
        return normalize_module_scope(value, ADMIN_MODULE_SCOPES).value

    @property
    def principal_type(self) -> PrincipalType:
        return PrincipalType.SUPER_ADMIN if self.is_super_admin else PrincipalType.ADMIN
