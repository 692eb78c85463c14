"""create_registered_organizations_and_fhir_endpoints

Revision ID: 51be8c29d7fa
Revises: c7a90f3d61e8
Create Date: 2026-10-03 14:02:19.774150

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = '51be8c29d7fa'
down_revision: Union[str, None] = 'c7a90f3d61e8'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create registered_organizations and their one-to-one fhir_endpoints."""
    op.create_table(
        'registered_organizations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column(
            'organization_id',
            UUID(as_uuid=True),
            sa.ForeignKey('organizations.id', ondelete='CASCADE', name='registered_organizations_organization_id_fkey'),
            nullable=False,
        ),
        sa.Column('api_env', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('organization_id', 'api_env', name='uq_registered_organization_api_env'),
    )
    op.create_index(
        'idx_registered_organizations_organization_id', 'registered_organizations', ['organization_id']
    )

    op.create_table(
        'fhir_endpoints',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column(
            'registered_organization_id',
            UUID(as_uuid=True),
            sa.ForeignKey(
                'registered_organizations.id',
                ondelete='CASCADE',
                name='fhir_endpoints_registered_organization_id_fkey',
            ),
            nullable=False,
        ),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('uri', sa.String(length=500), nullable=True),
        sa.Column('status', sa.String(length=30), nullable=True),
        sa.Column('managed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(
        'idx_fhir_endpoints_registered_organization_id',
        'fhir_endpoints',
        ['registered_organization_id'],
        unique=True,
    )


def downgrade() -> None:
    """Drop fhir_endpoints and registered_organizations."""
    op.drop_index('idx_fhir_endpoints_registered_organization_id', table_name='fhir_endpoints')
    op.drop_table('fhir_endpoints')
    op.drop_index('idx_registered_organizations_organization_id', table_name='registered_organizations')
    op.drop_table('registered_organizations')
