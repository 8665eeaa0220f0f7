"""Admin management schemas."""
from datetime import datetime
from typing import List, Optional, Union
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from app.core.enums import AdminLevel
from app.schemas.common import AccountRef


class AdminCreate(BaseModel):
    """Create admin request."""
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=80)
    last_name: str = Field(..., min_length=1, max_length=80)
    password: str
    module_scope: str


class AdminUpdate(BaseModel):
    """Partial admin update; omitted fields are left unchanged."""
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    module_scope: Optional[str] = None
    is_active: Optional[bool] = None


class AdminResponse(BaseModel):
    """Admin response schema."""
    id: str
    tenant_id: str
    email: str
    first_name: str
    last_name: str
    admin_level: AdminLevel
    is_super_admin: bool
    module_scope: Optional[str] = None
    is_active: bool
    created_by: Optional[AccountRef] = Field(
        default=None, validation_alias=AliasChoices("creator", "created_by")
    )
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AdminListFilters(BaseModel):
    """Filters echoed back with an admin listing."""
    include_superadmin: bool
    module_scope: str = "all"
    is_active: Union[bool, str] = "all"


class AdminListResponse(BaseModel):
    """Admin listing."""
    count: int
    filters: AdminListFilters
    admins: List[AdminResponse]
