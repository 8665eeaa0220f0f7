"""Bootstrap platform admin seeding tests."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import verify_password
from app.models.platform_admin import PlatformAdmin
from app.seed_data import seed_platform_admin


@pytest.mark.asyncio
async def test_seed_creates_platform_admin_once(db_session: AsyncSession, monkeypatch):
    monkeypatch.setattr(settings, "BOOTSTRAP_PLATFORM_ADMIN_EMAIL", "Owner@Example.com")
    monkeypatch.setattr(settings, "BOOTSTRAP_PLATFORM_ADMIN_PASSWORD", "bootstrap-pass-1")

    first = await seed_platform_admin(db_session)
    second = await seed_platform_admin(db_session)

    assert first.id == second.id
    assert first.email == "owner@example.com"
    assert verify_password("bootstrap-pass-1", first.password_hash)
    assert await db_session.scalar(select(func.count()).select_from(PlatformAdmin)) == 1


@pytest.mark.asyncio
async def test_seed_skipped_without_credentials(db_session: AsyncSession, monkeypatch):
    monkeypatch.setattr(settings, "BOOTSTRAP_PLATFORM_ADMIN_EMAIL", None)
    monkeypatch.setattr(settings, "BOOTSTRAP_PLATFORM_ADMIN_PASSWORD", None)

    assert await seed_platform_admin(db_session) is None
    assert await db_session.scalar(select(func.count()).select_from(PlatformAdmin)) == 0
