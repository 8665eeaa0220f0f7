"""Pydantic schemas."""
from app.schemas.common import AccountRef, AdminRef, NamedRef, ErrorResponse, MessageResponse
from app.schemas.auth import (
    LoginRequest, PlatformLoginResponse, AdminProfile, TenantRef,
    AdminLoginResponse, PrincipalResponse,
)
from app.schemas.admin import (
    AdminCreate, AdminUpdate, AdminResponse, AdminListFilters, AdminListResponse,
)
from app.schemas.platform import PlatformAdminCreate, PlatformAdminResponse
from app.schemas.tenant import (
    TenantCreate, TenantResponse, TenantCreateResponse, TenantAnalytics,
)
from app.schemas.user import TenantUserResponse

__all__ = [
    "AccountRef", "AdminRef", "NamedRef", "ErrorResponse", "MessageResponse",
    "LoginRequest", "PlatformLoginResponse", "AdminProfile", "TenantRef",
    "AdminLoginResponse", "PrincipalResponse",
    "AdminCreate", "AdminUpdate", "AdminResponse", "AdminListFilters", "AdminListResponse",
    "PlatformAdminCreate", "PlatformAdminResponse",
    "TenantCreate", "TenantResponse", "TenantCreateResponse", "TenantAnalytics",
    "TenantUserResponse",
]
