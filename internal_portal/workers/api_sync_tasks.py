"""
Platform API background tasks.

Pushes registration changes to the platform API of the matching environment.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from internal_portal.core.config import settings
from internal_portal.workers.celery_app import celery_app

logger = logging.getLogger(__name__)

NPI_SYSTEM = "http://hl7.org/fhir/sid/us-npi"


def api_client(api_env: str) -> httpx.Client:
    """HTTP client bound to the platform API for api_env."""
    return httpx.Client(
        base_url=settings.api_url_for(api_env),
        timeout=settings.API_REQUEST_TIMEOUT,
        headers={
            "Authorization": f"Bearer {settings.API_ADMIN_TOKEN}",
            "Accept": "application/fhir+json",
        },
    )


def organization_resource(
    organization: dict[str, Any], fhir_endpoint: dict[str, Any] | None
) -> dict[str, Any]:
    """Build the FHIR Organization body sent on registration."""
    resource: dict[str, Any] = {
        "resourceType": "Organization",
        "id": organization["id"],
        "name": organization["name"],
    }
    if organization.get("npi"):
        resource["identifier"] = [{"system": NPI_SYSTEM, "value": organization["npi"]}]
    if fhir_endpoint is not None:
        resource["endpoint"] = [
            {
                "resourceType": "Endpoint",
                "name": fhir_endpoint["name"],
                "address": fhir_endpoint["uri"],
                "status": fhir_endpoint["status"],
            }
        ]
    return resource


@celery_app.task(
    name="internal_portal.workers.api_sync_tasks.register_organization", bind=True, max_retries=3
)
def register_organization(
    self,  # type: ignore[no-untyped-def]
    api_env: str,
    organization: dict[str, Any],
    fhir_endpoint: dict[str, Any] | None = None,
) -> dict[str, str]:
    """
    Create or refresh an organization in the platform API.

    Args:
        api_env: Target environment (sandbox or production).
        organization: Dict with id, name and npi.
        fhir_endpoint: Dict with name, uri and status, if any.

    Returns:
        Dict with status and organization_id.
    """
    try:
        with api_client(api_env) as client:
            response = client.post(
                "/Organization", json=organization_resource(organization, fhir_endpoint)
            )
            response.raise_for_status()
        return {"status": "registered", "organization_id": organization["id"]}

    except httpx.HTTPError as exc:
        logger.error(
            "Failed to register organization_id=%s in %s: %s", organization["id"], api_env, exc
        )
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))


@celery_app.task(
    name="internal_portal.workers.api_sync_tasks.deregister_organization", bind=True, max_retries=3
)
def deregister_organization(
    self,  # type: ignore[no-untyped-def]
    api_env: str,
    organization_id: str,
) -> dict[str, str]:
    """Remove an organization from the platform API. A 404 counts as already removed."""
    try:
        with api_client(api_env) as client:
            response = client.delete(f"/Organization/{organization_id}")
            if response.status_code != httpx.codes.NOT_FOUND:
                response.raise_for_status()
        return {"status": "deregistered", "organization_id": organization_id}

    except httpx.HTTPError as exc:
        logger.error(
            "Failed to deregister organization_id=%s in %s: %s", organization_id, api_env, exc
        )
        raise self.retry(exc=exc, countdown=60 * (self.request.retries + 1))
