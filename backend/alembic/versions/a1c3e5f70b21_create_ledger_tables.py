"""create_ledger_tables

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f70b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
    ]


def _soft_delete():
    return [
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_by', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'chart_of_accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_code', sa.String(length=20), nullable=False),
        sa.Column('account_name', sa.String(length=100), nullable=False),
        sa.Column('account_type', sa.String(length=20), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('tenant_id', sa.String(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'account_code', name='_tenant_account_code_uc'),
    )
    op.create_index('ix_chart_of_accounts_id', 'chart_of_accounts', ['id'])
    op.create_index('ix_chart_of_accounts_account_code', 'chart_of_accounts', ['account_code'])
    op.create_index('ix_chart_of_accounts_tenant_id', 'chart_of_accounts', ['tenant_id'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('entry_number', sa.String(length=32), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('reference', sa.String(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('tenant_id', 'entry_number', name='_tenant_entry_number_uc'),
    )
    op.create_index('ix_journal_entries_id', 'journal_entries', ['id'])
    op.create_index('ix_journal_entries_tenant_id', 'journal_entries', ['tenant_id'])
    op.create_index('ix_journal_entries_reference', 'journal_entries', ['reference'])

    op.create_table(
        'journal_lines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('journal_entry_id', sa.Integer(), sa.ForeignKey('journal_entries.id'), nullable=False),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('chart_of_accounts.id'), nullable=False),
        sa.Column('debit', sa.Numeric(14, 2), sa.CheckConstraint('debit >= 0'), nullable=False),
        sa.Column('credit', sa.Numeric(14, 2), sa.CheckConstraint('credit >= 0'), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('line_number', sa.Integer(), nullable=False),
        sa.CheckConstraint(
            '(debit > 0 AND credit = 0) OR (debit = 0 AND credit > 0)',
            name='check_debit_or_credit_exclusive'
        ),
    )
    op.create_index('ix_journal_lines_id', 'journal_lines', ['id'])
    op.create_index('ix_journal_lines_journal_entry_id', 'journal_lines', ['journal_entry_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index('ix_transactions_id', 'transactions', ['id'])
    op.create_index('ix_transactions_tenant_id', 'transactions', ['tenant_id'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('amount', sa.Numeric(14, 2), nullable=False),
        sa.Column('vendor', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        *_soft_delete(),
    )
    op.create_index('ix_expenses_id', 'expenses', ['id'])
    op.create_index('ix_expenses_tenant_id', 'expenses', ['tenant_id'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('tenant_id', sa.String(), nullable=True),
        sa.Column('table_name', sa.String(), nullable=False),
        sa.Column('record_id', sa.String(), nullable=False),
        sa.Column('changed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('changed_by', sa.String(), nullable=False),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('old_values', sa.JSON(), nullable=True),
        sa.Column('new_values', sa.JSON(), nullable=True),
    )
    op.create_index('ix_audit_log_id', 'audit_log', ['id'])
    op.create_index('ix_audit_log_tenant_id', 'audit_log', ['tenant_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('audit_log')
    op.drop_table('expenses')
    op.drop_table('transactions')
    op.drop_table('journal_lines')
    op.drop_table('journal_entries')
    op.drop_table('chart_of_accounts')
