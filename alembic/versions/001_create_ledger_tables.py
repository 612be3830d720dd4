"""Create ledger tables

Revision ID: 001_create_ledger_tables
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_ledger_tables'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create companies, fiscal periods, accounts and journal entry tables."""
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('registration_number', sa.String(100), nullable=True),
        sa.Column('tax_number', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'fiscal_periods',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('period_name', sa.String(100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('is_closed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_fiscal_periods_company_id', 'fiscal_periods', ['company_id'])

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('account_code', sa.String(20), nullable=False),
        sa.Column('account_name', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.UniqueConstraint('company_id', 'account_code', name='uq_company_account_code'),
    )
    op.create_index('ix_accounts_company_id', 'accounts', ['company_id'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('fiscal_period_id', sa.Integer(), sa.ForeignKey('fiscal_periods.id'), nullable=True),
        sa.Column('reference', sa.String(100), nullable=True),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_journal_entries_company_id', 'journal_entries', ['company_id'])
    op.create_index('ix_journal_entries_fiscal_period_id', 'journal_entries', ['fiscal_period_id'])

    op.create_table(
        'journal_entry_lines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'journal_entry_id',
            sa.Integer(),
            sa.ForeignKey('journal_entries.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id'), nullable=False),
        sa.Column('debit_amount', sa.Numeric(15, 2), nullable=True),
        sa.Column('credit_amount', sa.Numeric(15, 2), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_journal_entry_lines_journal_entry_id', 'journal_entry_lines', ['journal_entry_id'])
    op.create_index('ix_journal_entry_lines_account_id', 'journal_entry_lines', ['account_id'])


def downgrade() -> None:
    """Drop the ledger tables."""
    op.drop_table('journal_entry_lines')
    op.drop_table('journal_entries')
    op.drop_table('accounts')
    op.drop_table('fiscal_periods')
    op.drop_table('companies')
