"""
FHIR endpoint construction keyed on api_env.

Sandbox registrations get the system-managed default endpoint; every other
environment gets a staff-editable endpoint. Callers decide once, when the
registration is built, and the endpoint's managed flag carries that decision
for the rest of its life.
"""

from __future__ import annotations

from internal_portal.core.config import settings
from internal_portal.models.enums import ApiEnv
from internal_portal.models.fhir_endpoint import FhirEndpoint
from internal_portal.schemas.registered_organization import FhirEndpointParams


def uses_default_endpoint(api_env: str | None) -> bool:
    return api_env == ApiEnv.sandbox.value


def build_default_fhir_endpoint() -> FhirEndpoint:
    return FhirEndpoint(
        name=settings.DEFAULT_FHIR_ENDPOINT_NAME,
        uri=settings.DEFAULT_FHIR_ENDPOINT_URI,
        status=settings.DEFAULT_FHIR_ENDPOINT_STATUS,
        managed=True,
    )


def build_editable_fhir_endpoint(params: FhirEndpointParams | None = None) -> FhirEndpoint:
    endpoint = FhirEndpoint(managed=False)
    if params is not None:
        apply_fhir_endpoint_params(endpoint, params)
    return endpoint


def build_fhir_endpoint(
    api_env: str | None, params: FhirEndpointParams | None = None
) -> FhirEndpoint:
    """Return the endpoint variant for api_env, filled from params when editable."""
    if uses_default_endpoint(api_env):
        return build_default_fhir_endpoint()
    return build_editable_fhir_endpoint(params)


def apply_fhir_endpoint_params(endpoint: FhirEndpoint, params: FhirEndpointParams) -> None:
    """Copy submitted values onto an editable endpoint. Managed endpoints are left alone."""
    if endpoint.managed:
        return
    submitted = params.model_dump(exclude_unset=True, exclude={"id"})
    for field, value in submitted.items():
        setattr(endpoint, field, value)
