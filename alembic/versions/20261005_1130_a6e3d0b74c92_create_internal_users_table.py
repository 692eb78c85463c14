"""create_internal_users_table

Revision ID: a6e3d0b74c92
Revises: 51be8c29d7fa
Create Date: 2026-10-05 11:30:55.240617

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = 'a6e3d0b74c92'
down_revision: Union[str, None] = '51be8c29d7fa'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create internal_users table for staff accounts."""
    op.create_table(
        'internal_users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index('idx_internal_users_email', 'internal_users', ['email'], unique=True)


def downgrade() -> None:
    """Drop internal_users table."""
    op.drop_index('idx_internal_users_email', table_name='internal_users')
    op.drop_table('internal_users')
