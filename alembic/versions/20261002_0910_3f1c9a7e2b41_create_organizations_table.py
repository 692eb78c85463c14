"""create_organizations_table

Revision ID: 3f1c9a7e2b41
Revises: 
Create Date: 2026-10-02 09:10:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create organizations table."""
    op.create_table(
        'organizations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('organization_type', sa.String(length=50), nullable=True),
        sa.Column('npi', sa.String(length=10), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index('idx_organizations_npi', 'organizations', ['npi'], unique=True)
    op.create_index('idx_organizations_name', 'organizations', ['name'])


def downgrade() -> None:
    """Drop organizations table."""
    op.drop_index('idx_organizations_name', table_name='organizations')
    op.drop_index('idx_organizations_npi', table_name='organizations')
    op.drop_table('organizations')
