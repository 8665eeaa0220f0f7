"""Seed script that bootstraps the first platform admin.

Run after ``alembic upgrade head``::

    BOOTSTRAP_PLATFORM_ADMIN_EMAIL=owner@example.com \\
    BOOTSTRAP_PLATFORM_ADMIN_PASSWORD=... python -m app.seed_data
"""
import asyncio
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import async_session_maker, engine
from app.core.logging import setup_logging, get_logger
from app.models.platform_admin import PlatformAdmin
from app.services.platform_service import PlatformService, normalize_email


logger = get_logger(__name__)


async def seed_platform_admin(session: AsyncSession) -> Optional[PlatformAdmin]:
    """Create the bootstrap platform admin unless it already exists."""
    email = settings.BOOTSTRAP_PLATFORM_ADMIN_EMAIL
    password = settings.BOOTSTRAP_PLATFORM_ADMIN_PASSWORD
    if not email or not password:
        logger.warning(
            "BOOTSTRAP_PLATFORM_ADMIN_EMAIL and BOOTSTRAP_PLATFORM_ADMIN_PASSWORD "
            "must be set to seed a platform admin"
        )
        return None

    result = await session.execute(
        select(PlatformAdmin).where(PlatformAdmin.email == normalize_email(email))
    )
    existing = result.scalar_one_or_none()
    if existing is not None:
        logger.info(f"Platform admin {existing.email} already exists. Skipping...")
        return existing

    platform_admin = await PlatformService(session).create_platform_admin(
        email=email,
        first_name=settings.BOOTSTRAP_PLATFORM_ADMIN_FIRST_NAME,
        last_name=settings.BOOTSTRAP_PLATFORM_ADMIN_LAST_NAME,
        password=password,
    )
    logger.info(f"Seeded platform admin: {platform_admin.email}")
    return platform_admin


async def main():
    """Main entry point."""
    setup_logging(settings.DEBUG)
    try:
        async with async_session_maker() as session:
            await seed_platform_admin(session)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
