"""Admin authentication API endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.authorization import Action
from app.core.config import settings
from app.core.dependencies import DbSession, require
from app.core.security import Principal, create_access_token
from app.schemas.auth import (
    AdminLoginResponse, AdminProfile, LoginRequest,
    PrincipalResponse, TenantRef,
)
from app.services.admin_auth_service import AdminAuthService, principal_for_admin


router = APIRouter()


@router.post("/login", response_model=AdminLoginResponse)
async def login(
    request: LoginRequest,
    db: DbSession,
):
    """Authenticate a superadmin or admin and return a JWT."""
    admin, tenant = await AdminAuthService(db).login(request.email, request.password)
    principal = principal_for_admin(admin)

    return AdminLoginResponse(
        admin=AdminProfile.model_validate(admin),
        tenant=TenantRef.model_validate(tenant),
        type=principal.type,
        token=create_access_token(principal),
        expires_in=settings.access_token_expire_seconds,
    )


@router.get("/me", response_model=PrincipalResponse)
async def get_current_admin_info(
    principal: Annotated[Principal, Depends(require(Action.READ_SELF))],
):
    """Get the principal carried by the current token."""
    return PrincipalResponse(**principal.model_dump())
