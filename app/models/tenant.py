"""Tenant model for multi-tenancy."""
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
import uuid

from app.core.database import Base
from app.core.enums import TenantStatus


class Tenant(Base):
    """Tenant model representing a customer organization.

    Every tenant-scoped table references ``tenants.id`` with ON DELETE CASCADE,
    so deleting a tenant row removes all of its data at the database level.
    """

    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    plan_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("plans.id", ondelete="SET NULL"),
        nullable=True
    )
    status: Mapped[TenantStatus] = mapped_column(
        SQLEnum(TenantStatus, native_enum=False, length=20),
        default=TenantStatus.ACTIVE,
        nullable=False
    )
    created_by_platform_admin: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("platform_admins.id", ondelete="SET NULL"),
        nullable=True
    )
    # admins.tenant_id points back here, so this side of the cycle is added by ALTER.
    super_admin_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("admins.id", ondelete="SET NULL", use_alter=True),
        nullable=True
    )
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
    plan = relationship("Plan")
    created_by_platform_admin_rel = relationship(
        "PlatformAdmin",
        foreign_keys=[created_by_platform_admin],
    )
    super_admin = relationship(
        "Admin",
        foreign_keys=[super_admin_id],
        post_update=True,
    )
    admins = relationship(
        "Admin",
        back_populates="tenant",
        foreign_keys="Admin.tenant_id",
        passive_deletes=True,
    )
    users = relationship("User", back_populates="tenant", passive_deletes=True)
