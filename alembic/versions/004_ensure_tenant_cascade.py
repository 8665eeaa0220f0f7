"""Ensure every tenant_id foreign key cascades on tenant delete

Revision ID: 004_ensure_tenant_cascade
Revises: 003_separate_admins_from_users
Create Date: 2023-11-17

"""
from typing import Sequence, Union

from app.core.migration_ops import column_names, repoint_foreign_key


revision: str = '004_ensure_tenant_cascade'
down_revision: Union[str, None] = '003_separate_admins_from_users'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Tenant-scoped tables as of this revision.
TENANT_SCOPED_TABLES = (
    'admins',
    'users',
    'admin_assignments',
    'admin_permissions',
    'admin_onboarding_requests',
    'organizations',
    'buildings',
    'floors',
    'subscriptions',
    'invoices',
    'usage_events',
    'notifications',
    'webhooks',
    'audit_logs',
    'domains',
)


def upgrade() -> None:
    for table in TENANT_SCOPED_TABLES:
        if 'tenant_id' in column_names(table):
            repoint_foreign_key(table, 'tenant_id', 'tenants', 'CASCADE')


def downgrade() -> None:
    # The previous delete rules were inconsistent per table; there is nothing
    # meaningful to restore.
    pass
