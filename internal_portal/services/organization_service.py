"""
Organization business logic.

Handles listing, creating and showing the organizations staff register
for API access.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.models.organization import Organization
from internal_portal.schemas.organization import (
    OrganizationCreateRequest,
    OrganizationDetailResponse,
    OrganizationListResponse,
    OrganizationResponse,
)

logger = logging.getLogger(__name__)


class OrganizationService:
    """Handles organization operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # List Organizations
    # -----------------------------------------------------------------------

    async def list_organizations(self) -> OrganizationListResponse:
        """All organizations, alphabetically."""
        result = await self.db.execute(select(Organization).order_by(Organization.name))
        organizations = result.scalars().all()
        return OrganizationListResponse(
            organizations=[OrganizationResponse.model_validate(o) for o in organizations],
            total=len(organizations),
        )

    # -----------------------------------------------------------------------
    # Create Organization
    # -----------------------------------------------------------------------

    async def create_organization(self, data: OrganizationCreateRequest) -> OrganizationResponse:
        """
        Create a new organization.

        - Validates NPI uniqueness when one is given
        - Returns OrganizationResponse
        """
        if data.npi is not None:
            existing = await self.db.scalar(
                select(func.count()).select_from(Organization).where(Organization.npi == data.npi)
            )
            if existing:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail={"code": "NPI_TAKEN", "message": "NPI is already registered"},
                )

        organization = Organization(
            name=data.name,
            organization_type=data.organization_type.value if data.organization_type else None,
            npi=data.npi,
            registered_organizations=[],
        )
        self.db.add(organization)
        await self.db.flush()

        logger.info("Created organization_id=%s", organization.id)
        return OrganizationResponse.model_validate(organization)

    # -----------------------------------------------------------------------
    # Get Organization
    # -----------------------------------------------------------------------

    async def get_organization(self, organization_id: UUID) -> OrganizationDetailResponse:
        """Organization with its API environment registrations."""
        result = await self.db.execute(
            select(Organization).where(Organization.id == organization_id)
        )
        organization = result.scalar_one_or_none()

        if organization is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"code": "ORG_NOT_FOUND", "message": "Organization not found"},
            )

        return OrganizationDetailResponse.model_validate(organization)
