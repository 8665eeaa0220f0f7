"""Authorization rules for the admin hierarchy.

Every protected operation is an ``Action``. A rule names the principal types
allowed to perform it and whether the principal must be bound to the tenant
being acted on. Decisions are pure: callers pass in a verified principal and
the target tenant id they already know.
"""
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional

from app.core.enums import PrincipalType
from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.security import Principal


class Action(str, Enum):
    """Protected operations."""
    CREATE_PLATFORM_ADMIN = "create_platform_admin"
    LIST_PLATFORM_ADMINS = "list_platform_admins"
    CREATE_TENANT = "create_tenant"
    LIST_TENANTS = "list_tenants"
    READ_TENANT = "read_tenant"
    DELETE_TENANT = "delete_tenant"
    READ_TENANT_USERS = "read_tenant_users"
    READ_TENANT_ANALYTICS = "read_tenant_analytics"
    CREATE_ADMIN = "create_admin"
    LIST_ADMINS = "list_admins"
    READ_ADMIN = "read_admin"
    UPDATE_ADMIN = "update_admin"
    DELETE_ADMIN = "delete_admin"
    READ_SELF = "read_self"


@dataclass(frozen=True)
class Rule:
    allowed: FrozenSet[PrincipalType]
    tenant_scoped: bool = False


def at_least(minimum: PrincipalType) -> FrozenSet[PrincipalType]:
    """All principal types ranked at or above ``minimum``."""
    return frozenset(t for t in PrincipalType if t.rank >= minimum.rank)


PLATFORM_ONLY = frozenset({PrincipalType.PLATFORM_ADMIN})
SUPER_ADMIN_ONLY = frozenset({PrincipalType.SUPER_ADMIN})

RULES = {
    Action.CREATE_PLATFORM_ADMIN: Rule(PLATFORM_ONLY),
    Action.LIST_PLATFORM_ADMINS: Rule(PLATFORM_ONLY),
    Action.CREATE_TENANT: Rule(PLATFORM_ONLY),
    Action.LIST_TENANTS: Rule(PLATFORM_ONLY),
    Action.READ_TENANT: Rule(PLATFORM_ONLY),
    Action.DELETE_TENANT: Rule(PLATFORM_ONLY),
    Action.READ_TENANT_USERS: Rule(PLATFORM_ONLY),
    Action.READ_TENANT_ANALYTICS: Rule(PLATFORM_ONLY),
    # Tenant admin management needs a tenant binding, which platform admins do not have.
    Action.CREATE_ADMIN: Rule(SUPER_ADMIN_ONLY, tenant_scoped=True),
    Action.LIST_ADMINS: Rule(SUPER_ADMIN_ONLY, tenant_scoped=True),
    Action.READ_ADMIN: Rule(SUPER_ADMIN_ONLY, tenant_scoped=True),
    Action.UPDATE_ADMIN: Rule(SUPER_ADMIN_ONLY, tenant_scoped=True),
    Action.DELETE_ADMIN: Rule(SUPER_ADMIN_ONLY, tenant_scoped=True),
    Action.READ_SELF: Rule(at_least(PrincipalType.ADMIN)),
}


def is_allowed(
    principal: Principal,
    action: Action,
    tenant_id: Optional[str] = None,
) -> bool:
    """Return whether ``principal`` may perform ``action`` on ``tenant_id``."""
    rule = RULES[action]
    if principal.type not in rule.allowed:
        return False
    if rule.tenant_scoped:
        if principal.tenant_id is None:
            return False
        if tenant_id is not None and tenant_id != principal.tenant_id:
            return False
    return True


def authorize(
    principal: Principal,
    action: Action,
    tenant_id: Optional[str] = None,
) -> None:
    """Raise ForbiddenError unless ``principal`` may perform ``action``."""
    if not is_allowed(principal, action, tenant_id):
        raise ForbiddenError(f"Access denied for {principal.type.value} on {action.value}")


def ensure_same_tenant(
    principal: Principal,
    resource_tenant_id: Optional[str],
    message: Optional[str] = None,
) -> None:
    """Hide resources of other tenants behind NotFoundError."""
    if resource_tenant_id is None or resource_tenant_id != principal.tenant_id:
        raise NotFoundError(message)
