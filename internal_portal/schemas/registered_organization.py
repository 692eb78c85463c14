"""
Registered organization schemas.

Request/response models for enabling, editing and disabling an
organization's access to an API environment.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from internal_portal.schemas.outcome import WorkflowResponse


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class FhirEndpointParams(BaseModel):
    """Permitted endpoint attributes. Unknown keys are dropped."""

    id: UUID | None = None
    status: str | None = None
    uri: str | None = None
    name: str | None = None

    model_config = {"extra": "ignore"}


class RegisteredOrganizationParams(BaseModel):
    """Permitted attributes for create and update. Unknown keys are dropped."""

    api_env: str | None = None
    organization_id: UUID | None = None
    fhir_endpoint: FhirEndpointParams | None = None

    model_config = {"extra": "ignore"}


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class FhirEndpointResponse(BaseModel):
    """
    Endpoint attached to a registration.

    kind is "default" for system-managed sandbox endpoints and "editable"
    for staff-specified ones.
    """

    id: UUID | None
    kind: Literal["default", "editable"]
    name: str | None
    uri: str | None
    status: str | None

    model_config = {"from_attributes": True}


class RegisteredOrganizationResponse(BaseModel):
    """A registration, persisted or still being filled in (id is None)."""

    id: UUID | None
    organization_id: UUID | None
    api_env: str | None
    fhir_endpoint: FhirEndpointResponse | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class RegisteredOrganizationFormResponse(BaseModel):
    """Response for the new/edit views."""

    organization_id: UUID
    organization_name: str
    api_env: str | None
    registered_organization: RegisteredOrganizationResponse


class RegisteredOrganizationActionResponse(WorkflowResponse):
    """Result of create, update or destroy."""

    api_env: str | None = None
    registered_organization: RegisteredOrganizationResponse | None = None
