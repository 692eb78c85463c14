"""create_users_table

Revision ID: 8d24e6b05c13
Revises: 3f1c9a7e2b41
Create Date: 2026-10-02 09:18:03.552871

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = '8d24e6b05c13'
down_revision: Union[str, None] = '3f1c9a7e2b41'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users table for platform accounts."""
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('organization', sa.String(length=255), nullable=False),
        sa.Column('organization_type', sa.String(length=50), nullable=True),
        sa.Column('num_providers', sa.Integer(), nullable=True, server_default=sa.text('0')),
        sa.Column('address_1', sa.String(length=255), nullable=False),
        sa.Column('address_2', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('state', sa.String(length=2), nullable=False),
        sa.Column('zip', sa.String(length=10), nullable=False),
        sa.Column('agree_to_terms', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index('idx_users_email', 'users', ['email'], unique=True)
    op.create_index('idx_users_created_at', 'users', ['created_at'])
    op.create_index('idx_users_organization_type', 'users', ['organization_type'])


def downgrade() -> None:
    """Drop users table."""
    op.drop_index('idx_users_organization_type', table_name='users')
    op.drop_index('idx_users_created_at', table_name='users')
    op.drop_index('idx_users_email', table_name='users')
    op.drop_table('users')
