"""Platform admin schemas."""
from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, EmailStr, Field

from app.schemas.common import AccountRef


class PlatformAdminCreate(BaseModel):
    """Create platform admin request."""
    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=80)
    last_name: str = Field(..., min_length=1, max_length=80)
    password: str


class PlatformAdminResponse(BaseModel):
    """Platform admin response."""
    id: str
    email: str
    first_name: str
    last_name: str
    is_active: bool
    created_by: Optional[AccountRef] = Field(
        default=None, validation_alias=AliasChoices("creator", "created_by")
    )
    created_at: datetime

    class Config:
        from_attributes = True
