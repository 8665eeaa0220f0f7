"""Admin management API for a tenant's superadmin."""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from app.core.authorization import Action, ensure_same_tenant
from app.core.dependencies import DbSession, require
from app.core.security import Principal
from app.models.admin import Admin
from app.schemas.admin import (
    AdminCreate, AdminListFilters, AdminListResponse,
    AdminResponse, AdminUpdate,
)
from app.schemas.common import MessageResponse
from app.services.admin_auth_service import principal_for_admin
from app.services.admin_service import AdminService


router = APIRouter()


def acting_superadmin(action: Action):
    """Authorize ``action`` and load the calling superadmin, which must still be active."""
    async def loader(
        db: DbSession,
        principal: Annotated[Principal, Depends(require(action))],
    ) -> Admin:
        return await AdminService(db).get_active_super_admin(principal.id, principal.tenant_id)
    return Annotated[Admin, Depends(loader)]


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    request: AdminCreate,
    db: DbSession,
    superadmin: acting_superadmin(Action.CREATE_ADMIN),
):
    """Create a module-scoped admin in the caller's tenant."""
    admin = await AdminService(db).create_admin(
        email=request.email,
        first_name=request.first_name,
        last_name=request.last_name,
        password=request.password,
        module_scope=request.module_scope,
        tenant_id=superadmin.tenant_id,
        created_by=superadmin.id,
    )
    return AdminResponse.model_validate(admin)


@router.get("", response_model=AdminListResponse)
async def list_admins(
    db: DbSession,
    superadmin: acting_superadmin(Action.LIST_ADMINS),
    include_superadmin: bool = Query(default=False),
    module_scope: Optional[str] = Query(default=None),
    is_active: Optional[bool] = Query(default=None),
):
    """List admins of the caller's tenant, newest first."""
    admins = await AdminService(db).list_tenant_admins(
        superadmin.tenant_id,
        include_superadmin=include_superadmin,
        module_scope=module_scope,
        is_active=is_active,
    )
    return AdminListResponse(
        count=len(admins),
        filters=AdminListFilters(
            include_superadmin=include_superadmin,
            module_scope=module_scope.strip().upper() if module_scope else "all",
            is_active="all" if is_active is None else is_active,
        ),
        admins=[AdminResponse.model_validate(a) for a in admins],
    )


@router.get("/{admin_id}", response_model=AdminResponse)
async def get_admin(
    admin_id: str,
    db: DbSession,
    superadmin: acting_superadmin(Action.READ_ADMIN),
):
    admin = await AdminService(db).get_admin(admin_id)
    ensure_same_tenant(
        principal_for_admin(superadmin),
        admin.tenant_id if admin is not None else None,
        "Admin not found in your tenant",
    )
    return AdminResponse.model_validate(admin)


@router.put("/{admin_id}", response_model=AdminResponse)
async def update_admin(
    admin_id: str,
    request: AdminUpdate,
    db: DbSession,
    superadmin: acting_superadmin(Action.UPDATE_ADMIN),
):
    """Update names, module scope or active flag of a non-superadmin."""
    admin = await AdminService(db).update_admin(
        admin_id,
        superadmin.tenant_id,
        **request.model_dump(exclude_unset=True),
    )
    return AdminResponse.model_validate(admin)


@router.delete("/{admin_id}", response_model=MessageResponse)
async def delete_admin(
    admin_id: str,
    db: DbSession,
    superadmin: acting_superadmin(Action.DELETE_ADMIN),
):
    await AdminService(db).delete_admin(admin_id, superadmin.tenant_id)
    return MessageResponse(message="Admin deleted successfully")
