"""Authorization rule tests."""
import pytest

from app.core.authorization import (
    Action,
    RULES,
    at_least,
    authorize,
    ensure_same_tenant,
    is_allowed,
)
from app.core.enums import PrincipalType
from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.security import Principal


PLATFORM = Principal(id="p1", email="p@x.example.com", type=PrincipalType.PLATFORM_ADMIN)
SUPER = Principal(id="s1", email="s@x.example.com", type=PrincipalType.SUPER_ADMIN, tenant_id="t1")
ADMIN = Principal(id="a1", email="a@x.example.com", type=PrincipalType.ADMIN, tenant_id="t1")
USER = Principal(id="u1", email="u@x.example.com", type=PrincipalType.USER, tenant_id="t1")

PLATFORM_ACTIONS = [
    Action.CREATE_PLATFORM_ADMIN,
    Action.LIST_PLATFORM_ADMINS,
    Action.CREATE_TENANT,
    Action.LIST_TENANTS,
    Action.READ_TENANT,
    Action.DELETE_TENANT,
    Action.READ_TENANT_USERS,
    Action.READ_TENANT_ANALYTICS,
]
ADMIN_MANAGEMENT_ACTIONS = [
    Action.CREATE_ADMIN,
    Action.LIST_ADMINS,
    Action.READ_ADMIN,
    Action.UPDATE_ADMIN,
    Action.DELETE_ADMIN,
]


def test_every_action_has_a_rule():
    assert set(RULES) == set(Action)


def test_rank_order():
    assert at_least(PrincipalType.ADMIN) == {
        PrincipalType.ADMIN,
        PrincipalType.SUPER_ADMIN,
        PrincipalType.PLATFORM_ADMIN,
    }
    assert at_least(PrincipalType.PLATFORM_ADMIN) == {PrincipalType.PLATFORM_ADMIN}


@pytest.mark.parametrize("action", PLATFORM_ACTIONS)
def test_platform_actions_only_for_platform_admin(action):
    assert is_allowed(PLATFORM, action)
    for principal in (SUPER, ADMIN, USER):
        assert not is_allowed(principal, action)


@pytest.mark.parametrize("action", ADMIN_MANAGEMENT_ACTIONS)
def test_admin_management_only_for_own_superadmin(action):
    assert is_allowed(SUPER, action, "t1")
    assert not is_allowed(SUPER, action, "t2")
    assert not is_allowed(ADMIN, action, "t1")
    assert not is_allowed(USER, action, "t1")
    # No tenant binding, so no tenant to manage.
    assert not is_allowed(PLATFORM, action, "t1")


def test_superadmin_without_tenant_is_denied():
    detached = Principal(id="s2", email="s2@x.example.com", type=PrincipalType.SUPER_ADMIN)

    assert not is_allowed(detached, Action.LIST_ADMINS)


def test_read_self_for_admins_and_above():
    for principal in (PLATFORM, SUPER, ADMIN):
        assert is_allowed(principal, Action.READ_SELF)
    assert not is_allowed(USER, Action.READ_SELF)


def test_authorize_raises_forbidden():
    with pytest.raises(ForbiddenError):
        authorize(ADMIN, Action.CREATE_ADMIN, "t1")
    authorize(SUPER, Action.CREATE_ADMIN, "t1")


def test_other_tenant_resources_are_not_found():
    ensure_same_tenant(SUPER, "t1")
    with pytest.raises(NotFoundError):
        ensure_same_tenant(SUPER, "t2")
    with pytest.raises(NotFoundError, match="Admin not found"):
        ensure_same_tenant(SUPER, None, "Admin not found in your tenant")
    with pytest.raises(NotFoundError):
        ensure_same_tenant(PLATFORM, "t1")
