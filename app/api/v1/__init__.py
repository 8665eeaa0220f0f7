"""API v1 router."""
from fastapi import APIRouter

from app.api.v1.admins import router as admins_router
from app.api.v1.auth import router as auth_router
from app.api.v1.platform import router as platform_router


router = APIRouter(prefix="/v1")

router.include_router(platform_router, prefix="/platform", tags=["Platform"])
router.include_router(auth_router, prefix="/admin/auth", tags=["Admin Authentication"])
router.include_router(admins_router, prefix="/admin/admins", tags=["Admin Management"])
