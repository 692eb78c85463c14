"""
User schemas.

Request/response models for the internal user directory and public sign-up.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from internal_portal.schemas.outcome import WorkflowResponse


class OrganizationLink(BaseModel):
    """Organization a user is assigned to."""

    id: UUID
    name: str

    model_config = {"from_attributes": True}


# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------

class UserSearchParams(BaseModel):
    """Query parameters accepted by the user search."""

    keyword: str | None = Field(default=None, max_length=200)
    requested_org: str | None = Field(default=None, max_length=255)
    created_after: date | None = None
    created_before: date | None = None


class UserResponse(BaseModel):
    """User detail response."""

    id: UUID
    email: str | None
    first_name: str | None
    last_name: str | None
    organization: str | None
    organization_type: str | None
    num_providers: int | None
    address_1: str | None
    address_2: str | None
    city: str | None
    state: str | None
    zip: str | None
    agree_to_terms: bool
    organizations: list[OrganizationLink]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    """One page of search results, rendered in the table layout."""

    users: list[UserResponse]
    total: int
    page: int
    per_page: int
    total_pages: int
    layout: Literal["table_index"] = "table_index"


class UserEditResponse(BaseModel):
    """Response for the edit view: the user and the organizations to pick from."""

    user: UserResponse
    organizations: list[OrganizationLink]


class UserUpdateParams(BaseModel):
    """Permitted attributes for a staff edit. Unknown keys are dropped."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    organization_ids: list[UUID] | None = None

    model_config = {"extra": "ignore"}


class UserActionResponse(WorkflowResponse):
    """Result of a staff edit."""

    user: UserResponse | None = None


# ---------------------------------------------------------------------------
# Sign-up
# ---------------------------------------------------------------------------

class SignUpRequest(BaseModel):
    """
    Request body for POST /users.

    Fields are loosely typed. The record validators report
    bad values as field errors instead of schema errors.
    """

    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    organization: str | None = None
    organization_type: str | None = None
    num_providers: int | str | None = None
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    agree_to_terms: bool | None = None


class SignUpResponse(BaseModel):
    """Response for a created account."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    organization: str
    num_providers: int | None
    created_at: datetime

    model_config = {"from_attributes": True}
