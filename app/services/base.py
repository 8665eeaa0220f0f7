"""Shared transaction handling for services."""
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, InternalError
from app.core.logging import get_logger


logger = get_logger(__name__)


class BaseService:
    """Service bound to one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def commit(self, conflict_message: str = "Resource already exists") -> None:
        """Commit, mapping constraint violations to ConflictError.

        The unique constraints are what settle concurrent duplicate inserts;
        pre-checks in the services only give a friendlier message earlier.
        """
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Integrity violation on commit: {e.orig}")
            raise ConflictError(conflict_message) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception("Commit failed")
            raise InternalError() from e

    async def rollback_and_translate(
        self,
        exc: Exception,
        conflict_message: str = "Resource already exists",
    ) -> Exception:
        """Roll back after a failed multi-step write and return the error to raise."""
        await self.db.rollback()
        if isinstance(exc, IntegrityError):
            logger.warning(f"Integrity violation, transaction rolled back: {exc.orig}")
            return ConflictError(conflict_message)
        if isinstance(exc, SQLAlchemyError):
            logger.exception("Database error, transaction rolled back")
            return InternalError()
        return exc
