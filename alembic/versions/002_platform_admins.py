"""Platform admins and schema updates

Revision ID: 002_platform_admins
Revises: 001_core_tables
Create Date: 2023-11-15

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from app.core.database import naming_convention
from app.core.migration_ops import table_names, column_names, foreign_keys_on


revision: str = '002_platform_admins'
down_revision: Union[str, None] = '001_core_tables'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    if 'platform_admins' not in table_names():
        op.create_table(
            'platform_admins',
            sa.Column('id', sa.String(36), primary_key=True),
            sa.Column('email', sa.String(120), nullable=False, unique=True),
            sa.Column('first_name', sa.String(80), nullable=False),
            sa.Column('last_name', sa.String(80), nullable=False),
            sa.Column('password_hash', sa.String(255), nullable=False),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('created_by', sa.String(36), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
            sa.ForeignKeyConstraint(
                ['created_by'], ['platform_admins.id'],
                name='fk_platform_admins_created_by_platform_admins',
                ondelete='SET NULL',
            ),
        )

    if 'created_by_platform_admin' not in column_names('tenants'):
        with op.batch_alter_table('tenants', naming_convention=naming_convention) as batch_op:
            batch_op.add_column(sa.Column('created_by_platform_admin', sa.String(36), nullable=True))
            batch_op.create_foreign_key(
                'fk_tenants_created_by_platform_admin_platform_admins', 'platform_admins',
                ['created_by_platform_admin'], ['id'], ondelete='SET NULL',
            )

    # Platform-level accounts have no tenant.
    user_columns = column_names('users')
    tenant_column = next(
        c for c in sa.inspect(op.get_bind()).get_columns('users') if c['name'] == 'tenant_id'
    )
    if not tenant_column['nullable'] or 'created_by' not in user_columns:
        with op.batch_alter_table('users', naming_convention=naming_convention) as batch_op:
            if not tenant_column['nullable']:
                batch_op.alter_column('tenant_id', existing_type=sa.String(36), nullable=True)
            if 'created_by' not in user_columns:
                batch_op.add_column(sa.Column('created_by', sa.String(36), nullable=True))
        if not foreign_keys_on('users', 'created_by'):
            with op.batch_alter_table('users', naming_convention=naming_convention) as batch_op:
                batch_op.create_foreign_key(
                    'fk_users_created_by_users', 'users',
                    ['created_by'], ['id'], ondelete='SET NULL',
                )

    assignment_columns = column_names('admin_assignments')
    if 'is_active' not in assignment_columns or 'updated_at' not in assignment_columns:
        # SQLite cannot ADD COLUMN with a CURRENT_TIMESTAMP default; rebuild the table there.
        recreate = 'always' if op.get_bind().dialect.name == 'sqlite' else 'auto'
        with op.batch_alter_table(
            'admin_assignments', naming_convention=naming_convention, recreate=recreate,
        ) as batch_op:
            if 'is_active' not in assignment_columns:
                batch_op.add_column(
                    sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true())
                )
            if 'updated_at' not in assignment_columns:
                batch_op.add_column(
                    sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                              server_default=sa.func.now())
                )


def downgrade() -> None:
    with op.batch_alter_table('admin_assignments', naming_convention=naming_convention) as batch_op:
        batch_op.drop_column('updated_at')
        batch_op.drop_column('is_active')

    with op.batch_alter_table('users', naming_convention=naming_convention) as batch_op:
        batch_op.drop_constraint('fk_users_created_by_users', type_='foreignkey')
        batch_op.drop_column('created_by')

    with op.batch_alter_table('tenants', naming_convention=naming_convention) as batch_op:
        batch_op.drop_constraint(
            'fk_tenants_created_by_platform_admin_platform_admins', type_='foreignkey'
        )
        batch_op.drop_column('created_by_platform_admin')

    op.drop_table('platform_admins')
