"""Baseline migration - accounts, users, contacts, calls and gifts

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates the tenant tables and the account-scoped activity tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Create tenant and activity tables."""

    # ==========================================================================
    # Accounts & Users
    # ==========================================================================
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('token_version', sa.Integer(), server_default='1', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default='1', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('idx_users_account_id', 'users', ['account_id'])

    # ==========================================================================
    # Contacts
    # ==========================================================================
    op.create_table(
        'contacts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('gender', sa.String(50), nullable=True),
        sa.Column('is_partial', sa.Boolean(), server_default='0', nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_contacts_account_id', 'contacts', ['account_id'])

    # ==========================================================================
    # Calls & Gifts
    # ==========================================================================
    op.create_table(
        'calls',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('contact_id', sa.Integer(), sa.ForeignKey('contacts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('called_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_calls_account_contact', 'calls', ['account_id', 'contact_id'])
    op.create_index('idx_calls_account_called_at', 'calls', ['account_id', 'called_at'])

    op.create_table(
        'gifts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('account_id', sa.Integer(), sa.ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('contact_id', sa.Integer(), sa.ForeignKey('contacts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        *_timestamps(),
    )
    op.create_index('idx_gifts_account_contact', 'gifts', ['account_id', 'contact_id'])


def downgrade() -> None:
    """Drop everything created in upgrade()."""
    op.drop_table('gifts')
    op.drop_table('calls')
    op.drop_table('contacts')
    op.drop_table('users')
    op.drop_table('accounts')
