"""Separate admins from users

Moves superadmin and admin accounts off ``users`` into a dedicated ``admins``
table and re-points every admin-owned foreign key from ``users`` to ``admins``.

Precondition: ``users.is_super_admin`` exists (pre-separation shape).
Effect: ``admins`` populated, dependent FKs re-pointed, legacy user columns dropped.
Downgrade is lossy: admin accounts are not moved back into ``users``.

Revision ID: 003_separate_admins_from_users
Revises: 002_platform_admins
Create Date: 2023-11-16

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from app.core.database import naming_convention
from app.core.migration_ops import (
    table_names,
    column_names,
    drop_foreign_keys,
    repoint_foreign_key,
)


revision: str = '003_separate_admins_from_users'
down_revision: Union[str, None] = '002_platform_admins'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


LEGACY_USER_COLUMNS = ('admin_level', 'is_super_admin', 'is_super_super_admin')

# Frozen copy of the admin module codes at the time of this revision.
ADMIN_SCOPES = ('DWAR', 'SANGRAH', 'SAMMILAN', 'SANDESH', 'FRESH_SERVE', 'ALL')

# (table, column, ON DELETE) for every admin-owned reference, in the order they are moved.
ADMIN_REFERENCES = (
    ('tenants', 'super_admin_id', 'SET NULL'),
    ('admin_assignments', 'admin_id', 'CASCADE'),
    ('admin_assignments', 'created_by', 'SET NULL'),
    ('admin_onboarding_requests', 'admin_id', 'SET NULL'),
    ('admin_onboarding_requests', 'approved_by', 'SET NULL'),
    ('admin_onboarding_requests', 'created_by', 'SET NULL'),
    ('admin_permissions', 'admin_id', 'CASCADE'),
    ('admin_permissions', 'granted_by', 'SET NULL'),
)


def _create_admins_table() -> None:
    op.create_table(
        'admins',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=True),
        sa.Column('email', sa.String(120), nullable=False),
        sa.Column('first_name', sa.String(80), nullable=False),
        sa.Column('last_name', sa.String(80), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('admin_level', sa.String(20), nullable=False, server_default='ADMIN'),
        sa.Column('is_super_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('module_scope', sa.String(50), nullable=True),
        sa.Column('created_by', sa.String(36), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ['tenant_id'], ['tenants.id'], name='fk_admins_tenant_id_tenants', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'], name='fk_admins_user_id_users', ondelete='SET NULL',
        ),
        sa.ForeignKeyConstraint(
            ['created_by'], ['admins.id'], name='fk_admins_created_by_admins', ondelete='SET NULL',
        ),
        sa.UniqueConstraint('email', name='uq_admins_email'),
        sa.CheckConstraint(
            "(admin_level = 'SUPER_ADMIN' AND is_super_admin AND module_scope IS NULL) OR "
            "(admin_level = 'ADMIN' AND NOT is_super_admin AND module_scope IS NOT NULL)",
            name='ck_admins_level_scope',
        ),
    )
    op.create_index('ix_admins_tenant_id', 'admins', ['tenant_id'])
    op.create_index('ix_admins_tenant_super', 'admins', ['tenant_id', 'is_super_admin'])
    op.create_index('ix_admins_tenant_scope', 'admins', ['tenant_id', 'module_scope'])


def _copy_admin_users() -> None:
    """Copy admin rows out of ``users``; ids are kept so existing references stay valid."""
    scopes = ", ".join(f"'{s}'" for s in ADMIN_SCOPES)

    op.execute(sa.text("""
        INSERT INTO admins (
            id, tenant_id, user_id, email, first_name, last_name, password_hash,
            admin_level, is_super_admin, module_scope, created_by, is_active,
            created_at, updated_at
        )
        SELECT
            u.id, u.tenant_id, NULL, u.email, u.first_name, u.last_name,
            COALESCE(u.password_hash, ''),
            'SUPER_ADMIN', true, NULL, NULL, u.is_active,
            u.created_at, u.updated_at
        FROM users u
        WHERE (u.is_super_admin = true OR u.admin_level = 'SUPER_ADMIN')
          AND u.tenant_id IS NOT NULL
          AND NOT EXISTS (SELECT 1 FROM admins a WHERE a.id = u.id OR a.email = u.email)
    """))

    # Admins whose scope is not an admin module are kept but disabled until re-scoped.
    op.execute(sa.text(f"""
        INSERT INTO admins (
            id, tenant_id, user_id, email, first_name, last_name, password_hash,
            admin_level, is_super_admin, module_scope, created_by, is_active,
            created_at, updated_at
        )
        SELECT
            u.id, u.tenant_id, NULL, u.email, u.first_name, u.last_name,
            COALESCE(u.password_hash, ''),
            'ADMIN', false,
            CASE WHEN UPPER(u.module_scope) IN ({scopes}) THEN UPPER(u.module_scope) ELSE 'CORE' END,
            NULL,
            CASE WHEN UPPER(u.module_scope) IN ({scopes}) THEN u.is_active ELSE false END,
            u.created_at, u.updated_at
        FROM users u
        WHERE u.is_super_admin = false
          AND u.admin_level NOT IN ('SUPER_ADMIN', 'EMPLOYEE')
          AND u.tenant_id IS NOT NULL
          AND NOT EXISTS (SELECT 1 FROM admins a WHERE a.id = u.id OR a.email = u.email)
    """))

    # Keep creator links that point at a superadmin of the same tenant.
    op.execute(sa.text("""
        UPDATE admins SET created_by = (
            SELECT u.created_by FROM users u WHERE u.id = admins.id
        )
        WHERE admins.created_by IS NULL
          AND admins.is_super_admin = false
          AND EXISTS (
              SELECT 1 FROM users u
              JOIN admins c ON c.id = u.created_by
              WHERE u.id = admins.id
                AND c.is_super_admin = true
                AND c.tenant_id = admins.tenant_id
          )
    """))

    # A tenant's super_admin_id may only name a superadmin of that tenant.
    op.execute(sa.text("""
        UPDATE tenants SET super_admin_id = NULL
        WHERE super_admin_id IS NOT NULL
          AND NOT EXISTS (
              SELECT 1 FROM admins a
              WHERE a.id = tenants.super_admin_id
                AND a.is_super_admin = true
                AND a.tenant_id = tenants.id
          )
    """))


def _rename_onboarding_user_column(old: str, new: str, referred_table: str) -> None:
    columns = column_names('admin_onboarding_requests')
    if old not in columns or new in columns:
        return
    drop_foreign_keys('admin_onboarding_requests', old)
    with op.batch_alter_table('admin_onboarding_requests', naming_convention=naming_convention) as batch_op:
        batch_op.alter_column(old, new_column_name=new, existing_type=sa.String(36))
    repoint_foreign_key('admin_onboarding_requests', new, referred_table, 'SET NULL')


def upgrade() -> None:
    if 'admins' not in table_names():
        _create_admins_table()

    legacy_columns = column_names('users')
    if 'is_super_admin' in legacy_columns:
        _copy_admin_users()

    _rename_onboarding_user_column('user_id', 'admin_id', 'admins')

    for table, column, ondelete in ADMIN_REFERENCES:
        repoint_foreign_key(table, column, 'admins', ondelete)

    to_drop = [c for c in LEGACY_USER_COLUMNS if c in column_names('users')]
    if to_drop:
        with op.batch_alter_table('users', naming_convention=naming_convention) as batch_op:
            for column in to_drop:
                batch_op.drop_column(column)


def downgrade() -> None:
    # Lossy: admin accounts stay out of users; references to them are nulled or removed.
    user_columns = column_names('users')
    with op.batch_alter_table('users', naming_convention=naming_convention) as batch_op:
        if 'admin_level' not in user_columns:
            batch_op.add_column(
                sa.Column('admin_level', sa.String(20), nullable=False, server_default='EMPLOYEE')
            )
        if 'is_super_admin' not in user_columns:
            batch_op.add_column(
                sa.Column('is_super_admin', sa.Boolean(), nullable=False, server_default=sa.false())
            )
        if 'is_super_super_admin' not in user_columns:
            batch_op.add_column(
                sa.Column('is_super_super_admin', sa.Boolean(), nullable=False, server_default=sa.false())
            )

    for table, column, ondelete in ADMIN_REFERENCES:
        if (table, column) == ('admin_onboarding_requests', 'admin_id'):
            continue
        repoint_foreign_key(table, column, 'users', ondelete)

    _rename_onboarding_user_column('admin_id', 'user_id', 'users')

    if 'admins' in table_names():
        op.drop_table('admins')
