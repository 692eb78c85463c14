"""
Organization schemas.

Request/response models for the internal organization endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from internal_portal.models.enums import OrganizationType
from internal_portal.schemas.registered_organization import RegisteredOrganizationResponse


class OrganizationCreateRequest(BaseModel):
    """Request body for POST /internal/organizations."""

    name: str = Field(min_length=2, max_length=255)
    organization_type: OrganizationType | None = None
    npi: str | None = Field(default=None, pattern=r"^\d{10}$")


class OrganizationResponse(BaseModel):
    """Organization detail response."""

    id: UUID
    name: str
    organization_type: str | None
    npi: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrganizationDetailResponse(OrganizationResponse):
    """Organization with its API environment grants."""

    registered_organizations: list[RegisteredOrganizationResponse]


class OrganizationListResponse(BaseModel):
    """Response for GET /internal/organizations."""

    organizations: list[OrganizationResponse]
    total: int
