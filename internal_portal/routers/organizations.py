"""
Internal organization endpoints.

List, create, show.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.database import get_db
from internal_portal.schemas.organization import (
    OrganizationCreateRequest,
    OrganizationDetailResponse,
    OrganizationListResponse,
    OrganizationResponse,
)
from internal_portal.services.organization_service import OrganizationService

router = APIRouter()


def get_org_service(db: AsyncSession = Depends(get_db)) -> OrganizationService:
    """Dependency that constructs OrganizationService."""
    return OrganizationService(db=db)


# ---------------------------------------------------------------------------
# List Organizations
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=OrganizationListResponse,
    summary="List organizations",
)
async def list_organizations(
    service: OrganizationService = Depends(get_org_service),
) -> OrganizationListResponse:
    return await service.list_organizations()


# ---------------------------------------------------------------------------
# Create Organization
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new organization",
)
async def create_organization(
    data: OrganizationCreateRequest,
    service: OrganizationService = Depends(get_org_service),
) -> OrganizationResponse:
    """
    Create a new organization.

    - NPI, when given, must be 10 digits and unique
    """
    return await service.create_organization(data)


# ---------------------------------------------------------------------------
# Get Organization
# ---------------------------------------------------------------------------

@router.get(
    "/{organization_id}",
    response_model=OrganizationDetailResponse,
    summary="Get organization with its API registrations",
)
async def get_organization(
    organization_id: UUID,
    service: OrganizationService = Depends(get_org_service),
) -> OrganizationDetailResponse:
    return await service.get_organization(organization_id)
