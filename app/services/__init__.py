"""Lifecycle services operating on the identity store."""
from app.services.admin_auth_service import AdminAuthService, principal_for_admin
from app.services.admin_service import AdminService
from app.services.platform_service import PlatformService, principal_for_platform_admin
from app.services.tenant_service import TenantService

__all__ = [
    "AdminAuthService",
    "AdminService",
    "PlatformService",
    "TenantService",
    "principal_for_admin",
    "principal_for_platform_admin",
]
