"""Application dependencies for dependency injection."""
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.authorization import Action, authorize
from app.core.database import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import Principal, decode_token


security = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Verify the bearer token from the Authorization header."""
    if credentials is None:
        raise UnauthorizedError(
            "Authorization header is required. Use: Bearer <token>"
        )
    return decode_token(credentials.credentials)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def require(action: Action):
    """Dependency factory gating a route on an authorization rule.

    Tenant-scoped actions are checked against the principal's own tenant,
    which is the only tenant an admin-management route ever acts on.
    """
    async def checker(principal: CurrentPrincipal) -> Principal:
        authorize(principal, action, principal.tenant_id)
        return principal
    return checker
