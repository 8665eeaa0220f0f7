"""Enum definitions for the application."""
from enum import Enum
from typing import Optional

from app.core.exceptions import ValidationError


class ModuleScope(str, Enum):
    """Business module an account may act within."""
    CORE = "CORE"
    DWAR = "DWAR"
    SANGRAH = "SANGRAH"
    SAMMILAN = "SAMMILAN"
    SANDESH = "SANDESH"
    FRESH_SERVE = "FRESH_SERVE"
    ALL = "ALL"


# Scopes an Admin may hold. CORE is the employee default and is not an admin module.
ADMIN_MODULE_SCOPES = frozenset(s for s in ModuleScope if s is not ModuleScope.CORE)


def normalize_module_scope(
    value: Optional[str],
    allowed: frozenset = frozenset(ModuleScope),
) -> ModuleScope:
    """Uppercase ``value`` and check it against ``allowed``."""
    normalized = (value or "").strip().upper()
    try:
        scope = ModuleScope(normalized)
    except ValueError:
        scope = None
    if scope is None or scope not in allowed:
        choices = ", ".join(sorted(s.value for s in allowed))
        raise ValidationError(f"Invalid module_scope. Must be one of: {choices}")
    return scope


class AdminLevel(str, Enum):
    """Admin level; SUPER_ADMIN is the tenant's top admin."""
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class PrincipalType(str, Enum):
    """Authenticated principal kinds carried in the token ``type`` claim."""
    PLATFORM_ADMIN = "platform_admin"
    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    USER = "user"

    @property
    def rank(self) -> int:
        return _PRINCIPAL_RANK[self]


_PRINCIPAL_RANK = {
    PrincipalType.USER: 0,
    PrincipalType.ADMIN: 1,
    PrincipalType.SUPER_ADMIN: 2,
    PrincipalType.PLATFORM_ADMIN: 3,
}


class TenantStatus(str, Enum):
    """Tenant status options."""
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    INACTIVE = "INACTIVE"


class OnboardingStatus(str, Enum):
    """Approval state of an admin onboarding request."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
