"""Initial schema

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entity_columns() -> list[sa.Column]:
    """Columns every table shares (id, created_at, version)."""
    return [
        sa.Column('id', sa.Integer(), nullable=False, autoincrement=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
    ]


def _is_active() -> sa.Column:
    return sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true())


def _money(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision=14, scale=2), nullable=False, server_default='0')


# table name -> indexed columns, in creation order
INDEXES = {
    'persons': ['is_active', 'document_number'],
    'users': ['is_active', 'username', 'person_id'],
    'roles': ['is_active', 'role_name'],
    'permissions': ['is_active'],
    'forms': ['is_active'],
    'modules': ['is_active'],
    'modulo_forms': ['is_active', 'form_id', 'module_id'],
    'role_users': ['is_active', 'role_id', 'user_id'],
    'role_form_permissions': ['role_id', 'form_id', 'permission_id'],
    'access_logs': ['is_active', 'user_id'],
    'user_notifications': ['user_id'],
    'type_infractions': ['is_active', 'user_id'],
    'state_infractions': ['is_active', 'infraction_id', 'person_id'],
    'information_infractions': [],
    'payment_agreements': ['is_active'],
    'bills': ['is_active', 'barcode'],
    'type_payments': ['is_active'],
    'payment_histories': ['is_active', 'user_id'],
    'payment_users': ['person_id'],
}


def _table_columns() -> dict[str, list]:
    return {
        'persons': [
            _is_active(),
            sa.Column('first_name', sa.String(length=100), nullable=False),
            sa.Column('last_name', sa.String(length=100), nullable=False),
            sa.Column('document_number', sa.String(length=30), nullable=False),
            sa.Column('document_type', sa.String(length=20), nullable=True),
            sa.Column('phone', sa.String(length=30), nullable=True),
        ],
        'users': [
            _is_active(),
            sa.Column('username', sa.String(length=100), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('password', sa.String(length=255), nullable=False),
            sa.Column('person_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['person_id'], ['persons.id']),
        ],
        'roles': [
            _is_active(),
            sa.Column('role_name', sa.String(length=100), nullable=False),
            sa.Column('description', sa.String(length=500), nullable=True),
        ],
        'permissions': [
            _is_active(),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('description', sa.String(length=500), nullable=True),
        ],
        'forms': [
            _is_active(),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('description', sa.String(length=500), nullable=True),
            sa.Column('status', sa.String(length=50), nullable=True),
            sa.Column('date_creation', sa.DateTime(timezone=True), nullable=False),
        ],
        'modules': [
            _is_active(),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('description', sa.String(length=500), nullable=True),
            sa.Column('status', sa.String(length=50), nullable=True),
        ],
        'modulo_forms': [
            _is_active(),
            sa.Column('form_id', sa.Integer(), nullable=False),
            sa.Column('module_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['form_id'], ['forms.id']),
            sa.ForeignKeyConstraint(['module_id'], ['modules.id']),
        ],
        'role_users': [
            _is_active(),
            sa.Column('role_id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(['role_id'], ['roles.id']),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        ],
        'role_form_permissions': [
            sa.Column('role_id', sa.Integer(), nullable=False),
            sa.Column('form_id', sa.Integer(), nullable=False),
            sa.Column('permission_id', sa.Integer(), nullable=False),
            sa.Column('can_create', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('can_read', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('can_update', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('can_delete', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.ForeignKeyConstraint(['role_id'], ['roles.id']),
            sa.ForeignKeyConstraint(['form_id'], ['forms.id']),
            sa.ForeignKeyConstraint(['permission_id'], ['permissions.id']),
        ],
        'access_logs': [
            _is_active(),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('action', sa.String(length=200), nullable=False),
            sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
            sa.Column('status', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('details', sa.String(length=1000), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        ],
        'user_notifications': [
            sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('message', sa.String(length=1000), nullable=False),
            sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        ],
        'type_infractions': [
            _is_active(),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('type_violation', sa.String(length=200), nullable=False),
            _money('value_infraction'),
            sa.Column('description', sa.String(length=500), nullable=True),
            sa.Column('information_fine', sa.String(length=500), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        ],
        'state_infractions': [
            _is_active(),
            sa.Column('infraction_id', sa.Integer(), nullable=False),
            sa.Column('person_id', sa.Integer(), nullable=False),
            sa.Column('date_violation', sa.DateTime(timezone=True), nullable=False),
            _money('fine_value'),
            sa.Column('state', sa.String(length=50), nullable=False),
            sa.ForeignKeyConstraint(['infraction_id'], ['type_infractions.id']),
            sa.ForeignKeyConstraint(['person_id'], ['persons.id']),
        ],
        'information_infractions': [
            sa.Column('number_smldv', sa.Integer(), nullable=False, server_default='0'),
            _money('minimum_wage'),
            _money('value_smldv'),
            _money('total_value'),
        ],
        'payment_agreements': [
            _is_active(),
            sa.Column('address', sa.String(length=200), nullable=False),
            sa.Column('neighborhood', sa.String(length=100), nullable=True),
            _money('finance_amount'),
            sa.Column('agreement_description', sa.String(length=500), nullable=True),
        ],
        'bills': [
            _is_active(),
            sa.Column('barcode', sa.String(length=100), nullable=False),
            sa.Column('issue_date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('expiration_date', sa.DateTime(timezone=True), nullable=False),
            _money('total_value'),
            sa.Column('state', sa.String(length=50), nullable=True),
            sa.Column('payment_agreement_id', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['payment_agreement_id'], ['payment_agreements.id']),
        ],
        'type_payments': [
            _is_active(),
            sa.Column('name', sa.String(length=100), nullable=False),
            sa.Column('description', sa.String(length=500), nullable=True),
        ],
        'payment_histories': [
            _is_active(),
            sa.Column('user_id', sa.Integer(), nullable=False),
            _money('amount'),
            sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('note', sa.String(length=500), nullable=True),
            sa.Column('information_infraction_id', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['user_id'], ['users.id']),
            sa.ForeignKeyConstraint(['information_infraction_id'], ['information_infractions.id']),
        ],
        'payment_users': [
            sa.Column('person_id', sa.Integer(), nullable=False),
            _money('amount'),
            sa.Column('payment_date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('bill_id', sa.Integer(), nullable=True),
            sa.Column('payment_agreement_id', sa.Integer(), nullable=True),
            sa.Column('type_payment_id', sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(['person_id'], ['persons.id']),
            sa.ForeignKeyConstraint(['bill_id'], ['bills.id']),
            sa.ForeignKeyConstraint(['payment_agreement_id'], ['payment_agreements.id']),
            sa.ForeignKeyConstraint(['type_payment_id'], ['type_payments.id']),
        ],
    }


def upgrade() -> None:
    """
    Create the security, audit, infraction and payment tables.

    Tables that already exist are skipped, so the migration can be applied
    to a database first created with CREATE_TABLES_ON_STARTUP.
    """
    bind = op.get_bind()
    existing_tables = inspect(bind).get_table_names()

    for table_name, columns in _table_columns().items():
        if table_name in existing_tables:
            continue

        op.create_table(
            table_name,
            *_entity_columns(),
            *columns,
            sa.PrimaryKeyConstraint('id')
        )
        for column in INDEXES[table_name]:
            op.create_index(f'ix_{table_name}_{column}', table_name, [column])


def downgrade() -> None:
    """Drop all tables, dependents first."""
    for table_name in reversed(list(INDEXES)):
        for column in INDEXES[table_name]:
            op.drop_index(f'ix_{table_name}_{column}', table_name=table_name)
        op.drop_table(table_name)
