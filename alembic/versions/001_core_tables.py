"""Core tables (pre-separation schema: admin fields live on users)

Revision ID: 001_core_tables
Revises:
Create Date: 2023-11-14

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from app.core.migration_ops import table_names, foreign_keys_on


revision: str = '001_core_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id():
    return sa.Column('id', sa.String(36), primary_key=True)


def _created_at():
    return sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def _updated_at():
    return sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def _fk(table, column, referred, ondelete=None):
    return sa.ForeignKeyConstraint(
        [column], [f'{referred}.id'],
        name=f'fk_{table}_{column}_{referred}',
        ondelete=ondelete,
    )


def upgrade() -> None:
    existing = table_names()

    if 'plans' not in existing:
        op.create_table(
            'plans',
            _id(),
            sa.Column('name', sa.String(80), nullable=False, unique=True),
            sa.Column('price_monthly', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('price_yearly', sa.Numeric(10, 2), nullable=False, server_default='0'),
        )

    if 'tenants' not in existing:
        op.create_table(
            'tenants',
            _id(),
            sa.Column('name', sa.String(150), nullable=False),
            sa.Column('code', sa.String(50), nullable=False, unique=True),
            sa.Column('plan_id', sa.String(36), nullable=True),
            sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
            sa.Column('super_admin_id', sa.String(36), nullable=True),
            _created_at(),
            _updated_at(),
            _fk('tenants', 'plan_id', 'plans', 'SET NULL'),
        )

    if 'roles' not in existing:
        op.create_table(
            'roles',
            _id(),
            sa.Column('name', sa.String(80), nullable=False),
            sa.Column('module_scope', sa.String(50), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
        )

    if 'organizations' not in existing:
        op.create_table(
            'organizations',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('name', sa.String(150), nullable=False),
            sa.Column('address', sa.String(255), nullable=True),
            sa.Column('contact_email', sa.String(120), nullable=True),
            sa.Column('contact_phone', sa.String(30), nullable=True),
            _created_at(),
            _fk('organizations', 'tenant_id', 'tenants', 'CASCADE'),
        )

    if 'buildings' not in existing:
        op.create_table(
            'buildings',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('name', sa.String(150), nullable=False),
            sa.Column('address', sa.String(255), nullable=True),
            _created_at(),
            _fk('buildings', 'tenant_id', 'tenants', 'CASCADE'),
        )

    if 'floors' not in existing:
        op.create_table(
            'floors',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('building_id', sa.String(36), nullable=False, index=True),
            sa.Column('name', sa.String(100), nullable=False),
            sa.Column('floor_number', sa.Integer(), nullable=True),
            _created_at(),
            _fk('floors', 'tenant_id', 'tenants', 'CASCADE'),
            _fk('floors', 'building_id', 'buildings', 'CASCADE'),
        )

    if 'domains' not in existing:
        op.create_table(
            'domains',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('domain', sa.String(255), nullable=False, unique=True),
            sa.Column('verified', sa.Boolean(), nullable=False, server_default=sa.false()),
            _created_at(),
            _fk('domains', 'tenant_id', 'tenants'),
        )

    if 'users' not in existing:
        op.create_table(
            'users',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('organization_id', sa.String(36), nullable=True),
            sa.Column('building_id', sa.String(36), nullable=True),
            sa.Column('floor_id', sa.String(36), nullable=True),
            sa.Column('role_id', sa.String(36), nullable=True),
            sa.Column('first_name', sa.String(80), nullable=False),
            sa.Column('last_name', sa.String(80), nullable=False),
            sa.Column('email', sa.String(120), nullable=False, unique=True),
            sa.Column('employee_id', sa.String(50), nullable=True, unique=True),
            sa.Column('department', sa.String(100), nullable=True),
            sa.Column('employee_grade', sa.String(50), nullable=True),
            sa.Column('phone', sa.String(30), nullable=True),
            sa.Column('password_hash', sa.String(255), nullable=True),
            sa.Column('module_scope', sa.String(50), nullable=False, server_default='CORE'),
            sa.Column('admin_level', sa.String(20), nullable=False, server_default='EMPLOYEE'),
            sa.Column('is_super_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('is_super_super_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            _created_at(),
            _updated_at(),
            _fk('users', 'tenant_id', 'tenants', 'CASCADE'),
            _fk('users', 'organization_id', 'organizations', 'SET NULL'),
            _fk('users', 'building_id', 'buildings', 'SET NULL'),
            _fk('users', 'floor_id', 'floors', 'SET NULL'),
            _fk('users', 'role_id', 'roles', 'SET NULL'),
        )

    # tenants <-> users is a cycle; close it once both tables exist.
    if not foreign_keys_on('tenants', 'super_admin_id'):
        with op.batch_alter_table('tenants') as batch_op:
            batch_op.create_foreign_key(
                'fk_tenants_super_admin_id_users', 'users',
                ['super_admin_id'], ['id'], ondelete='SET NULL',
            )

    if 'admin_assignments' not in existing:
        op.create_table(
            'admin_assignments',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('admin_id', sa.String(36), nullable=False, index=True),
            sa.Column('module_scope', sa.String(50), nullable=False),
            sa.Column('building_id', sa.String(36), nullable=True),
            sa.Column('floor_id', sa.String(36), nullable=True),
            sa.Column('created_by', sa.String(36), nullable=True),
            _created_at(),
            _fk('admin_assignments', 'tenant_id', 'tenants'),
            _fk('admin_assignments', 'admin_id', 'users', 'CASCADE'),
            _fk('admin_assignments', 'building_id', 'buildings', 'CASCADE'),
            _fk('admin_assignments', 'floor_id', 'floors', 'CASCADE'),
            _fk('admin_assignments', 'created_by', 'users', 'SET NULL'),
        )

    if 'admin_permissions' not in existing:
        op.create_table(
            'admin_permissions',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('admin_id', sa.String(36), nullable=False),
            sa.Column('permission_key', sa.String(100), nullable=False),
            sa.Column('is_granted', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('granted_by', sa.String(36), nullable=True),
            _created_at(),
            _fk('admin_permissions', 'tenant_id', 'tenants', 'CASCADE'),
            _fk('admin_permissions', 'admin_id', 'users', 'CASCADE'),
            _fk('admin_permissions', 'granted_by', 'users', 'SET NULL'),
            sa.UniqueConstraint(
                'tenant_id', 'admin_id', 'permission_key',
                name='uq_admin_permissions_tenant_admin_key',
            ),
        )

    if 'admin_onboarding_requests' not in existing:
        op.create_table(
            'admin_onboarding_requests',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('email', sa.String(120), nullable=False, unique=True),
            sa.Column('employee_id', sa.String(50), nullable=True, unique=True),
            sa.Column('first_name', sa.String(80), nullable=False),
            sa.Column('last_name', sa.String(80), nullable=False),
            sa.Column('phone', sa.String(30), nullable=True),
            sa.Column('department', sa.String(100), nullable=True),
            sa.Column('password_hash', sa.String(255), nullable=False),
            sa.Column('approval_status', sa.String(20), nullable=False, server_default='PENDING'),
            sa.Column('rejection_reason', sa.Text(), nullable=True),
            sa.Column('user_id', sa.String(36), nullable=True),
            sa.Column('approved_by', sa.String(36), nullable=True),
            sa.Column('created_by', sa.String(36), nullable=True),
            _created_at(),
            _updated_at(),
            _fk('admin_onboarding_requests', 'tenant_id', 'tenants'),
            _fk('admin_onboarding_requests', 'user_id', 'users', 'SET NULL'),
            _fk('admin_onboarding_requests', 'approved_by', 'users', 'SET NULL'),
            _fk('admin_onboarding_requests', 'created_by', 'users', 'SET NULL'),
        )

    if 'subscriptions' not in existing:
        op.create_table(
            'subscriptions',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('plan_id', sa.String(36), nullable=True),
            sa.Column('status', sa.String(20), nullable=False, server_default='ACTIVE'),
            sa.Column('start_date', sa.Date(), nullable=True),
            sa.Column('end_date', sa.Date(), nullable=True),
            sa.Column('next_billing_date', sa.Date(), nullable=True),
            _created_at(),
            _fk('subscriptions', 'tenant_id', 'tenants'),
            _fk('subscriptions', 'plan_id', 'plans', 'SET NULL'),
        )

    if 'invoices' not in existing:
        op.create_table(
            'invoices',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('subscription_id', sa.String(36), nullable=True),
            sa.Column('amount', sa.Numeric(10, 2), nullable=False),
            sa.Column('currency', sa.String(3), nullable=False, server_default='INR'),
            sa.Column('paid', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('payment_ref', sa.String(120), nullable=True),
            sa.Column('issued_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
            _fk('invoices', 'tenant_id', 'tenants', 'CASCADE'),
            _fk('invoices', 'subscription_id', 'subscriptions', 'SET NULL'),
        )

    if 'usage_events' not in existing:
        op.create_table(
            'usage_events',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=True, index=True),
            sa.Column('module_scope', sa.String(50), nullable=False),
            sa.Column('metric_key', sa.String(100), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
            sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            _fk('usage_events', 'tenant_id', 'tenants'),
        )

    if 'notifications' not in existing:
        op.create_table(
            'notifications',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('user_id', sa.String(36), nullable=True),
            sa.Column('title', sa.String(200), nullable=False),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('type', sa.String(50), nullable=True),
            sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
            _created_at(),
            _fk('notifications', 'tenant_id', 'tenants', 'CASCADE'),
            _fk('notifications', 'user_id', 'users', 'SET NULL'),
        )

    if 'webhooks' not in existing:
        op.create_table(
            'webhooks',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=False, index=True),
            sa.Column('url', sa.String(500), nullable=False),
            sa.Column('secret_token', sa.String(255), nullable=True),
            sa.Column('event_type', sa.String(100), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            _created_at(),
            _fk('webhooks', 'tenant_id', 'tenants'),
        )

    if 'audit_logs' not in existing:
        op.create_table(
            'audit_logs',
            _id(),
            sa.Column('tenant_id', sa.String(36), nullable=True, index=True),
            sa.Column('user_id', sa.String(36), nullable=True),
            sa.Column('module', sa.String(50), nullable=True),
            sa.Column('action', sa.String(100), nullable=False),
            sa.Column('details', sa.JSON(), nullable=True),
            _created_at(),
            _fk('audit_logs', 'tenant_id', 'tenants'),
            _fk('audit_logs', 'user_id', 'users', 'SET NULL'),
        )


def downgrade() -> None:
    with op.batch_alter_table('tenants') as batch_op:
        batch_op.drop_constraint('fk_tenants_super_admin_id_users', type_='foreignkey')

    for table in (
        'audit_logs', 'webhooks', 'notifications', 'usage_events', 'invoices',
        'subscriptions', 'admin_onboarding_requests', 'admin_permissions',
        'admin_assignments', 'users', 'domains', 'floors', 'buildings',
        'organizations', 'roles', 'tenants', 'plans',
    ):
        op.drop_table(table)
