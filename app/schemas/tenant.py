"""Tenant schemas."""
from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from app.core.enums import TenantStatus
from app.schemas.admin import AdminResponse
from app.schemas.common import AccountRef, AdminRef


class TenantCreate(BaseModel):
    """Create tenant together with its superadmin."""
    tenant_name: str = Field(..., min_length=1, max_length=150)
    tenant_code: str = Field(..., min_length=2, max_length=50)
    plan_id: Optional[str] = None
    superadmin_email: EmailStr
    superadmin_first_name: str = Field(..., min_length=1, max_length=80)
    superadmin_last_name: str = Field(..., min_length=1, max_length=80)
    superadmin_password: str


class TenantResponse(BaseModel):
    """Tenant response schema."""
    id: str
    name: str
    code: str
    plan_id: Optional[str] = None
    status: TenantStatus
    super_admin_id: Optional[str] = None
    super_admin: Optional[AdminRef] = None
    created_by_platform_admin: Optional[AccountRef] = Field(
        default=None,
        validation_alias=AliasChoices("created_by_platform_admin_rel", "created_by_platform_admin"),
    )
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TenantCreateResponse(BaseModel):
    """Tenant and the superadmin provisioned with it."""
    tenant: TenantResponse
    superadmin: AdminResponse


class TenantAnalytics(BaseModel):
    """Per-tenant account counts."""
    tenant_id: str
    tenant_name: str
    tenant_code: str
    total_users: int = 0
    total_employees: int = 0
    total_admins: int = 0
    total_super_admins: int = 0
