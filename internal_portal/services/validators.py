"""
Record validators.

Each record is described by a pydantic model whose fields are declared in the
order errors are reported. The validators copy the ORM attributes into the
model and return the full Errors bag. Checks that need the database
(uniqueness) live in the services that persist the record.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, HttpUrl, TypeAdapter, field_validator
from pydantic_core import PydanticCustomError

from internal_portal.core.validation import BLANK, Errors, Present, RequiredStr, check
from internal_portal.models.enums import ApiEnv, FhirEndpointStatus, OrganizationType, US_STATES
from internal_portal.models.fhir_endpoint import FhirEndpoint
from internal_portal.models.registered_organization import RegisteredOrganization
from internal_portal.models.user import User

ZIP_PATTERN = r"^[0-9]{5}(?:-[0-9]{4})?$"

AGREE_TO_TERMS_MESSAGE = "you must agree to the terms of service to create an account"

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128

UsState = Literal[tuple(US_STATES)]
EndpointStatus = Literal[tuple(status.value for status in FhirEndpointStatus)]
ProviderCount = Annotated[int, Field(ge=0)]

provider_count = TypeAdapter(ProviderCount)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class UserRecord(BaseModel):
    last_name: RequiredStr
    first_name: RequiredStr
    organization: RequiredStr
    num_providers: ProviderCount | None = None
    address_1: RequiredStr
    city: RequiredStr
    state: UsState
    zip: Annotated[str, Field(pattern=ZIP_PATTERN)]
    agree_to_terms: Any

    @field_validator("agree_to_terms")
    @classmethod
    def terms_must_be_accepted(cls, v: Any) -> bool:
        # Only the boolean True counts as agreement; 1 or "true" do not.
        if v is not True:
            raise PydanticCustomError("accepted", AGREE_TO_TERMS_MESSAGE)
        return v


class UserEmailRecord(BaseModel):
    email: Annotated[EmailStr, Present]


class SignUpRecord(UserEmailRecord):
    password: Annotated[
        str, Present, Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    ]
    organization_type: OrganizationType | None = None


class FhirEndpointRecord(BaseModel):
    name: RequiredStr
    uri: Annotated[HttpUrl, Present]
    status: EndpointStatus


class RegisteredOrganizationRecord(BaseModel):
    organization: Annotated[UUID, Present]
    api_env: Annotated[ApiEnv, Present]


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def validate_user(user: User) -> Errors:
    """Field rules every persisted user must satisfy."""
    return check(
        UserRecord,
        {
            "last_name": user.last_name,
            "first_name": user.first_name,
            "organization": user.organization,
            "num_providers": user.num_providers,
            "address_1": user.address_1,
            "city": user.city,
            "state": user.state,
            "zip": user.zip,
            "agree_to_terms": user.agree_to_terms,
        },
    )


def validate_user_email(user: User) -> Errors:
    return check(UserEmailRecord, {"email": user.email})


def validate_sign_up(user: User, password: str | None) -> Errors:
    """Account rules checked in addition to validate_user when a user signs up."""
    return check(
        SignUpRecord,
        {
            "email": user.email,
            "password": password,
            "organization_type": user.organization_type,
        },
    )


def validate_fhir_endpoint(endpoint: FhirEndpoint) -> Errors:
    return check(
        FhirEndpointRecord,
        {"name": endpoint.name, "uri": endpoint.uri, "status": endpoint.status},
    )


def validate_registered_organization(registered_organization: RegisteredOrganization) -> Errors:
    errors = check(
        RegisteredOrganizationRecord,
        {
            "organization": registered_organization.organization_id,
            "api_env": registered_organization.api_env,
        },
    )

    endpoint = registered_organization.fhir_endpoint
    if endpoint is None:
        errors.add("fhir_endpoint", BLANK)
    else:
        errors.merge(validate_fhir_endpoint(endpoint), prefix="fhir_endpoint")
    return errors
