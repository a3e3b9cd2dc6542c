"""tenant-owned records and security audit log

Revision ID: 0001_tenant_records
Revises: 
Create Date: 2026-10-17
"""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa

revision = '0001_tenant_records'
down_revision = None
branch_labels = None
depends_on = None


def _tenant_columns():
    return [
        sa.Column('group_id', sa.String(length=64), nullable=False),
        sa.Column('company_id', sa.String(length=64), nullable=True),
        sa.Column('created_by', sa.String(length=64), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade():
    op.create_table('invoices',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('number', sa.String(length=64), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='DRAFT'),
        *_tenant_columns()
    )
    op.create_index('ix_invoices_number', 'invoices', ['number'])
    op.create_index('ix_invoices_status', 'invoices', ['status'])
    op.create_index('ix_invoices_group_id', 'invoices', ['group_id'])
    op.create_index('ix_invoices_company_id', 'invoices', ['company_id'])

    op.create_table('purchase_orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('supplier_name', sa.String(length=128), nullable=False),
        sa.Column('total_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='DRAFT'),
        *_tenant_columns()
    )
    op.create_index('ix_purchase_orders_supplier_name', 'purchase_orders', ['supplier_name'])
    op.create_index('ix_purchase_orders_status', 'purchase_orders', ['status'])
    op.create_index('ix_purchase_orders_group_id', 'purchase_orders', ['group_id'])
    op.create_index('ix_purchase_orders_company_id', 'purchase_orders', ['company_id'])

    op.create_table('security_audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('principal_id', sa.String(length=64), nullable=True),
        sa.Column('event_type', sa.String(length=32), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=True),
        sa.Column('resource', sa.String(length=64), nullable=True),
        sa.Column('action', sa.String(length=32), nullable=True),
        sa.Column('tenant_group_id', sa.String(length=64), nullable=True),
        sa.Column('detail', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'))
    )
    op.create_index('ix_security_audit_logs_principal_id', 'security_audit_logs', ['principal_id'])
    op.create_index('ix_security_audit_logs_event_type', 'security_audit_logs', ['event_type'])


def downgrade():
    for tbl in ['security_audit_logs', 'purchase_orders', 'invoices']:
        op.drop_table(tbl)
