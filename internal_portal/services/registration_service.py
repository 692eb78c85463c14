"""
Registered organization business logic.

Enables, edits and disables an organization's access to a platform API
environment. Every operation is scoped to the parent organization and
answers with a flash message plus a redirect or a form to render again.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.paths import internal_organization_path
from internal_portal.core.validation import BASE, TAKEN, Errors
from internal_portal.models.organization import Organization
from internal_portal.models.registered_organization import RegisteredOrganization
from internal_portal.schemas.outcome import Flash
from internal_portal.schemas.registered_organization import (
    RegisteredOrganizationActionResponse,
    RegisteredOrganizationFormResponse,
    RegisteredOrganizationParams,
    RegisteredOrganizationResponse,
)
from internal_portal.services.fhir_endpoint_factory import (
    apply_fhir_endpoint_params,
    build_fhir_endpoint,
)
from internal_portal.services.validators import validate_registered_organization

logger = logging.getLogger(__name__)

ORGANIZATION_MISMATCH = "must match the organization being registered"
API_ENV_FIXED = "cannot be changed once access is enabled"


def _env_label(api_env: str | None) -> str:
    return api_env or "the requested environment"


class RegistrationService:
    """Handles registered organization operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------------------

    async def _get_organization(self, organization_id: UUID) -> Organization:
        result = await self.db.execute(
            select(Organization).where(Organization.id == organization_id)
        )
        organization = result.scalar_one_or_none()
        if organization is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"code": "ORG_NOT_FOUND", "message": "Organization not found"},
            )
        return organization

    async def _get_registered_organization(
        self, organization: Organization, registered_organization_id: UUID
    ) -> RegisteredOrganization:
        result = await self.db.execute(
            select(RegisteredOrganization).where(
                RegisteredOrganization.id == registered_organization_id,
                RegisteredOrganization.organization_id == organization.id,
            )
        )
        registered_organization = result.scalar_one_or_none()
        if registered_organization is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={
                    "code": "REGISTERED_ORG_NOT_FOUND",
                    "message": "Registered organization not found",
                },
            )
        return registered_organization

    # -----------------------------------------------------------------------
    # New
    # -----------------------------------------------------------------------

    async def prepare_new(
        self, organization_id: UUID, api_env: str | None
    ) -> RegisteredOrganizationFormResponse:
        """Build an unsaved registration with the endpoint variant for api_env."""
        organization = await self._get_organization(organization_id)

        registered_organization = RegisteredOrganization(
            organization_id=organization.id, api_env=api_env
        )
        registered_organization.fhir_endpoint = build_fhir_endpoint(api_env)

        return RegisteredOrganizationFormResponse(
            organization_id=organization.id,
            organization_name=organization.name,
            api_env=api_env,
            registered_organization=RegisteredOrganizationResponse.model_validate(
                registered_organization
            ),
        )

    # -----------------------------------------------------------------------
    # Create
    # -----------------------------------------------------------------------

    async def create(
        self,
        organization_id: UUID,
        params: RegisteredOrganizationParams,
        requested_api_env: str | None = None,
    ) -> RegisteredOrganizationActionResponse:
        """
        Enable access to an API environment.

        - Effective api_env is the submitted one, else the requested one
        - Sandbox gets the default endpoint, other environments the submitted one
        - One registration per environment per organization
        """
        organization = await self._get_organization(organization_id)
        organization_path = internal_organization_path(organization.id)

        registered_organization = RegisteredOrganization(
            organization_id=organization.id, api_env=params.api_env
        )
        api_env = registered_organization.api_env or requested_api_env
        registered_organization.fhir_endpoint = build_fhir_endpoint(api_env, params.fhir_endpoint)

        errors = validate_registered_organization(registered_organization)
        if params.organization_id is not None and params.organization_id != organization.id:
            errors.add("organization_id", ORGANIZATION_MISMATCH)
        if (
            registered_organization.api_env
            and organization.registered_organization_for(registered_organization.api_env)
        ):
            errors.add("api_env", TAKEN)

        form_state = RegisteredOrganizationResponse.model_validate(registered_organization)

        if not errors:
            organization.registered_organizations.append(registered_organization)
            try:
                await self.db.flush()
            except IntegrityError as exc:
                await self.db.rollback()
                logger.warning("Registration insert rejected by the database: %s", exc)
                errors.add(BASE, "Registration conflicts with an existing record")

        if errors:
            logger.info(
                "Rejected %s registration for organization_id=%s: %s",
                api_env, organization_id, errors.to_sentence(),
            )
            return RegisteredOrganizationActionResponse(
                flash=Flash.alert(
                    f"Access to {_env_label(api_env)} could not be enabled: "
                    f"{errors.to_sentence()}."
                ),
                render="new",
                api_env=api_env,
                registered_organization=form_state,
                errors=errors.to_dict(),
            )

        logger.info(
            "Enabled %s access for organization_id=%s", registered_organization.api_env, organization.id
        )
        self._queue_api_registration(organization, registered_organization)

        return RegisteredOrganizationActionResponse(
            flash=Flash.notice(f"Access to {registered_organization.api_env} enabled."),
            redirect_to=organization_path,
            api_env=registered_organization.api_env,
            registered_organization=RegisteredOrganizationResponse.model_validate(
                registered_organization
            ),
        )

    # -----------------------------------------------------------------------
    # Edit
    # -----------------------------------------------------------------------

    async def prepare_edit(
        self, organization_id: UUID, registered_organization_id: UUID
    ) -> RegisteredOrganizationFormResponse:
        organization = await self._get_organization(organization_id)
        registered_organization = await self._get_registered_organization(
            organization, registered_organization_id
        )
        return RegisteredOrganizationFormResponse(
            organization_id=organization.id,
            organization_name=organization.name,
            api_env=registered_organization.api_env,
            registered_organization=RegisteredOrganizationResponse.model_validate(
                registered_organization
            ),
        )

    # -----------------------------------------------------------------------
    # Update
    # -----------------------------------------------------------------------

    async def update(
        self,
        organization_id: UUID,
        registered_organization_id: UUID,
        params: RegisteredOrganizationParams,
    ) -> RegisteredOrganizationActionResponse:
        """
        Apply staff edits to a registration.

        - api_env is fixed; messages always name the existing environment
        - Managed (sandbox default) endpoints ignore submitted values
        """
        organization = await self._get_organization(organization_id)
        registered_organization = await self._get_registered_organization(
            organization, registered_organization_id
        )
        api_env = registered_organization.api_env
        label = api_env.capitalize()
        organization_path = internal_organization_path(organization.id)

        errors = Errors()
        if params.organization_id is not None and params.organization_id != organization.id:
            errors.add("organization_id", ORGANIZATION_MISMATCH)
        if params.api_env is not None and params.api_env != api_env:
            errors.add("api_env", API_ENV_FIXED)

        if params.fhir_endpoint is not None:
            endpoint = registered_organization.fhir_endpoint
            if endpoint is None:
                registered_organization.fhir_endpoint = build_fhir_endpoint(
                    api_env, params.fhir_endpoint
                )
            else:
                if params.fhir_endpoint.id is not None and params.fhir_endpoint.id != endpoint.id:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND,
                        detail={"code": "ENDPOINT_NOT_FOUND", "message": "FHIR endpoint not found"},
                    )
                apply_fhir_endpoint_params(endpoint, params.fhir_endpoint)

        errors.merge(validate_registered_organization(registered_organization))
        form_state = RegisteredOrganizationResponse.model_validate(registered_organization)

        if errors:
            await self.db.rollback()
            logger.info(
                "Rejected update of registered_organization_id=%s: %s",
                registered_organization_id, errors.to_sentence(),
            )
            return RegisteredOrganizationActionResponse(
                flash=Flash.alert(
                    f"{label} access could not be updated: {errors.to_sentence()}."
                ),
                render="edit",
                api_env=api_env,
                registered_organization=form_state,
                errors=errors.to_dict(),
            )

        await self.db.flush()
        logger.info("Updated %s access for organization_id=%s", api_env, organization.id)
        self._queue_api_registration(organization, registered_organization)

        return RegisteredOrganizationActionResponse(
            flash=Flash.notice(f"{label} access updated."),
            redirect_to=organization_path,
            api_env=api_env,
            registered_organization=RegisteredOrganizationResponse.model_validate(
                registered_organization
            ),
        )

    # -----------------------------------------------------------------------
    # Destroy
    # -----------------------------------------------------------------------

    async def destroy(
        self, organization_id: UUID, registered_organization_id: UUID
    ) -> RegisteredOrganizationActionResponse:
        """Disable access. Redirects to the organization whether or not the delete succeeds."""
        organization = await self._get_organization(organization_id)
        registered_organization = await self._get_registered_organization(
            organization, registered_organization_id
        )
        api_env = registered_organization.api_env
        label = api_env.capitalize()
        organization_path = internal_organization_path(organization.id)
        organization_ref = str(organization.id)

        try:
            organization.registered_organizations.remove(registered_organization)
            await self.db.delete(registered_organization)
            await self.db.flush()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(
                "Failed to delete registered_organization_id=%s: %s",
                registered_organization_id, exc,
            )
            errors = Errors()
            errors.add(BASE, "the registration could not be deleted")
            return RegisteredOrganizationActionResponse(
                flash=Flash.alert(
                    f"{label} access could not be disabled: {errors.to_sentence()}."
                ),
                redirect_to=organization_path,
                api_env=api_env,
                errors=errors.to_dict(),
            )

        logger.info("Disabled %s access for organization_id=%s", api_env, organization_ref)
        self._queue_api_removal(api_env, organization_ref)

        return RegisteredOrganizationActionResponse(
            flash=Flash.notice(f"{label} access disabled."),
            redirect_to=organization_path,
            api_env=api_env,
        )

    # -----------------------------------------------------------------------
    # Platform API sync
    # -----------------------------------------------------------------------

    def _queue_api_registration(
        self, organization: Organization, registered_organization: RegisteredOrganization
    ) -> None:
        from internal_portal.workers.api_sync_tasks import register_organization

        endpoint = registered_organization.fhir_endpoint
        register_organization.delay(
            api_env=registered_organization.api_env,
            organization={
                "id": str(organization.id),
                "name": organization.name,
                "npi": organization.npi,
            },
            fhir_endpoint={
                "name": endpoint.name,
                "uri": endpoint.uri,
                "status": endpoint.status,
            } if endpoint is not None else None,
        )

    def _queue_api_removal(self, api_env: str, organization_id: str) -> None:
        from internal_portal.workers.api_sync_tasks import deregister_organization

        deregister_organization.delay(api_env=api_env, organization_id=organization_id)
