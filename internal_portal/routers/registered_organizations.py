"""
Registered organization endpoints.

Enable, edit and disable an organization's access to an API environment.
Failed writes answer 422 with the form state to render again.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.database import get_db
from internal_portal.schemas.registered_organization import (
    RegisteredOrganizationActionResponse,
    RegisteredOrganizationFormResponse,
    RegisteredOrganizationParams,
)
from internal_portal.services.registration_service import RegistrationService

router = APIRouter()


def get_registration_service(db: AsyncSession = Depends(get_db)) -> RegistrationService:
    """Dependency that constructs RegistrationService."""
    return RegistrationService(db=db)


def _set_status(
    response: Response, outcome: RegisteredOrganizationActionResponse, success_status: int
) -> RegisteredOrganizationActionResponse:
    response.status_code = (
        success_status if outcome.succeeded else status.HTTP_422_UNPROCESSABLE_ENTITY
    )
    return outcome


# ---------------------------------------------------------------------------
# New
# ---------------------------------------------------------------------------

@router.get(
    "/new",
    response_model=RegisteredOrganizationFormResponse,
    summary="Prepare a new registration",
)
async def new_registered_organization(
    organization_id: UUID,
    api_env: str | None = Query(default=None),
    service: RegistrationService = Depends(get_registration_service),
) -> RegisteredOrganizationFormResponse:
    """
    Unsaved registration for the form.

    - sandbox comes with the default endpoint
    - any other environment comes with an empty editable endpoint
    """
    return await service.prepare_new(organization_id, api_env)


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=RegisteredOrganizationActionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enable access to an API environment",
)
async def create_registered_organization(
    organization_id: UUID,
    response: Response,
    params: RegisteredOrganizationParams | None = None,
    api_env: str | None = Query(default=None),
    service: RegistrationService = Depends(get_registration_service),
) -> RegisteredOrganizationActionResponse:
    outcome = await service.create(
        organization_id, params or RegisteredOrganizationParams(), requested_api_env=api_env
    )
    return _set_status(response, outcome, status.HTTP_201_CREATED)


# ---------------------------------------------------------------------------
# Edit
# ---------------------------------------------------------------------------

@router.get(
    "/{registered_organization_id}/edit",
    response_model=RegisteredOrganizationFormResponse,
    summary="Load a registration for editing",
)
async def edit_registered_organization(
    organization_id: UUID,
    registered_organization_id: UUID,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisteredOrganizationFormResponse:
    return await service.prepare_edit(organization_id, registered_organization_id)


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@router.patch(
    "/{registered_organization_id}",
    response_model=RegisteredOrganizationActionResponse,
    summary="Update a registration",
)
async def update_registered_organization(
    organization_id: UUID,
    registered_organization_id: UUID,
    response: Response,
    params: RegisteredOrganizationParams | None = None,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisteredOrganizationActionResponse:
    outcome = await service.update(
        organization_id, registered_organization_id, params or RegisteredOrganizationParams()
    )
    return _set_status(response, outcome, status.HTTP_200_OK)


# ---------------------------------------------------------------------------
# Destroy
# ---------------------------------------------------------------------------

@router.delete(
    "/{registered_organization_id}",
    response_model=RegisteredOrganizationActionResponse,
    summary="Disable access to an API environment",
)
async def delete_registered_organization(
    organization_id: UUID,
    registered_organization_id: UUID,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisteredOrganizationActionResponse:
    """Always redirects to the organization; the flash tells whether it worked."""
    return await service.destroy(organization_id, registered_organization_id)
