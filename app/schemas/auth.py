"""Authentication schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.core.enums import AdminLevel, PrincipalType


class LoginRequest(BaseModel):
    """Login request schema."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class PlatformLoginResponse(BaseModel):
    """Platform admin login response."""
    id: str
    email: str
    first_name: str
    last_name: str
    token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds


class AdminProfile(BaseModel):
    """Logged-in admin."""
    id: str
    email: str
    first_name: str
    last_name: str
    admin_level: AdminLevel
    is_super_admin: bool
    module_scope: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TenantRef(BaseModel):
    """Tenant an admin belongs to."""
    id: str
    name: str
    code: str

    class Config:
        from_attributes = True


class AdminLoginResponse(BaseModel):
    """Admin/superadmin login response."""
    admin: AdminProfile
    tenant: TenantRef
    type: PrincipalType
    token: str
    token_type: str = "Bearer"
    expires_in: int


class PrincipalResponse(BaseModel):
    """Verified principal of the current request."""
    id: str
    email: str
    type: PrincipalType
    tenant_id: Optional[str] = None
