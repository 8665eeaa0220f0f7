"""Platform admin API: platform accounts, tenant lifecycle and analytics."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from app.core.authorization import Action
from app.core.config import settings
from app.core.dependencies import DbSession, require
from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.core.security import Principal, create_access_token
from app.models.platform_admin import PlatformAdmin
from app.schemas.admin import AdminResponse
from app.schemas.auth import LoginRequest, PlatformLoginResponse
from app.schemas.common import MessageResponse
from app.schemas.platform import PlatformAdminCreate, PlatformAdminResponse
from app.schemas.tenant import (
    TenantAnalytics,
    TenantCreate,
    TenantCreateResponse,
    TenantResponse,
)
from app.schemas.user import TenantUserResponse
from app.services.platform_service import PlatformService, principal_for_platform_admin
from app.services.tenant_service import TenantService


router = APIRouter()
logger = get_logger(__name__)


def platform_admin(action: Action):
    """Authorize ``action`` and load the calling platform admin, which must still be active."""
    async def loader(
        db: DbSession,
        principal: Annotated[Principal, Depends(require(action))],
    ) -> PlatformAdmin:
        return await PlatformService(db).get_active_platform_admin(principal.id)
    return Annotated[PlatformAdmin, Depends(loader)]


@router.post("/auth/login", response_model=PlatformLoginResponse)
async def login(request: LoginRequest, db: DbSession):
    """Authenticate a platform admin and return an access token."""
    account = await PlatformService(db).authenticate(request.email, request.password)
    token = create_access_token(principal_for_platform_admin(account))

    return PlatformLoginResponse(
        id=account.id,
        email=account.email,
        first_name=account.first_name,
        last_name=account.last_name,
        token=token,
        expires_in=settings.access_token_expire_seconds,
    )


@router.post("/admins", response_model=PlatformAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_platform_admin(
    request: PlatformAdminCreate,
    db: DbSession,
    operator: platform_admin(Action.CREATE_PLATFORM_ADMIN),
):
    """Create another platform admin."""
    account = await PlatformService(db).create_platform_admin(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        password=request.password,
        created_by=operator.id,
    )
    return PlatformAdminResponse.model_validate(account)


@router.get("/admins", response_model=List[PlatformAdminResponse])
async def list_platform_admins(
    db: DbSession,
    operator: platform_admin(Action.LIST_PLATFORM_ADMINS),
):
    """List platform admins, newest first."""
    accounts = await PlatformService(db).list_platform_admins()
    return [PlatformAdminResponse.model_validate(a) for a in accounts]


@router.post("/tenants", response_model=TenantCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    request: TenantCreate,
    db: DbSession,
    operator: platform_admin(Action.CREATE_TENANT),
):
    """Create a tenant and its superadmin atomically."""
    tenant, superadmin = await TenantService(db).create_tenant_with_superadmin(
        tenant_name=request.tenant_name,
        tenant_code=request.tenant_code,
        plan_id=request.plan_id,
        superadmin_email=request.superadmin_email,
        superadmin_first_name=request.superadmin_first_name,
        superadmin_last_name=request.superadmin_last_name,
        superadmin_password=request.superadmin_password,
        created_by_platform_admin=operator.id,
    )
    return TenantCreateResponse(
        tenant=TenantResponse.model_validate(tenant),
        superadmin=AdminResponse.model_validate(superadmin),
    )


@router.get("/tenants", response_model=List[TenantResponse])
async def list_tenants(
    db: DbSession,
    operator: platform_admin(Action.LIST_TENANTS),
):
    """List tenants with their superadmin and creating platform admin."""
    tenants = await TenantService(db).list_tenants()
    return [TenantResponse.model_validate(t) for t in tenants]


@router.get("/tenants/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: str,
    db: DbSession,
    operator: platform_admin(Action.READ_TENANT),
):
    tenant = await TenantService(db).get_tenant(tenant_id)
    if tenant is None:
        raise NotFoundError("Tenant not found")
    return TenantResponse.model_validate(tenant)


@router.delete("/tenants/{tenant_id}", response_model=MessageResponse)
async def delete_tenant(
    tenant_id: str,
    db: DbSession,
    operator: platform_admin(Action.DELETE_TENANT),
):
    """Delete a tenant and, by cascade, everything it owns."""
    await TenantService(db).delete_tenant(tenant_id)
    logger.info(f"Tenant {tenant_id} deleted by platform admin {operator.email}")
    return MessageResponse(message="Tenant and all associated data deleted successfully")


@router.get("/tenants/{tenant_id}/users", response_model=List[TenantUserResponse])
async def get_tenant_users(
    tenant_id: str,
    db: DbSession,
    operator: platform_admin(Action.READ_TENANT_USERS),
):
    users = await TenantService(db).get_tenant_users(tenant_id)
    return [TenantUserResponse.model_validate(u) for u in users]


@router.get("/analytics/tenants", response_model=List[TenantAnalytics])
async def get_tenant_analytics(
    db: DbSession,
    operator: platform_admin(Action.READ_TENANT_ANALYTICS),
):
    """Per-tenant user and admin counts."""
    return await TenantService(db).get_tenant_analytics()
