"""Tenant user schemas."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from app.schemas.common import NamedRef


class TenantUserResponse(BaseModel):
    """Tenant employee with optional placement details."""
    id: str
    tenant_id: Optional[str] = None
    first_name: str
    last_name: str
    email: str
    employee_id: Optional[str] = None
    department: Optional[str] = None
    employee_grade: Optional[str] = None
    phone: Optional[str] = None
    module_scope: str
    is_active: bool
    organization: Optional[NamedRef] = None
    building: Optional[NamedRef] = None
    floor: Optional[NamedRef] = None
    role: Optional[NamedRef] = None
    created_at: datetime

    class Config:
        from_attributes = True
