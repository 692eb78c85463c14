"""create_organization_user_assignments_table

Revision ID: c7a90f3d61e8
Revises: 8d24e6b05c13
Create Date: 2026-10-02 09:25:47.009312

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = 'c7a90f3d61e8'
down_revision: Union[str, None] = '8d24e6b05c13'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create organization_user_assignments join table."""
    op.create_table(
        'organization_user_assignments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('organization_id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_foreign_key(
        'organization_user_assignments_organization_id_fkey',
        'organization_user_assignments', 'organizations',
        ['organization_id'], ['id'],
        ondelete='CASCADE'
    )
    op.create_foreign_key(
        'organization_user_assignments_user_id_fkey',
        'organization_user_assignments', 'users',
        ['user_id'], ['id'],
        ondelete='CASCADE'
    )

    op.create_index('idx_org_user_assignments_org_id', 'organization_user_assignments', ['organization_id'])
    op.create_index('idx_org_user_assignments_user_id', 'organization_user_assignments', ['user_id'])
    op.create_index(
        'uq_organization_user_assignment',
        'organization_user_assignments',
        ['organization_id', 'user_id'],
        unique=True,
    )


def downgrade() -> None:
    """Drop organization_user_assignments table."""
    op.drop_index('uq_organization_user_assignment', table_name='organization_user_assignments')
    op.drop_index('idx_org_user_assignments_user_id', table_name='organization_user_assignments')
    op.drop_index('idx_org_user_assignments_org_id', table_name='organization_user_assignments')
    op.drop_constraint('organization_user_assignments_user_id_fkey', 'organization_user_assignments', type_='foreignkey')
    op.drop_constraint('organization_user_assignments_organization_id_fkey', 'organization_user_assignments', type_='foreignkey')
    op.drop_table('organization_user_assignments')
