"""Paths used as redirect targets in workflow responses."""

from uuid import UUID

from internal_portal.core.config import settings


def internal_organization_path(organization_id: UUID) -> str:
    return f"{settings.API_V1_PREFIX}/internal/organizations/{organization_id}"


def internal_user_path(user_id: UUID) -> str:
    return f"{settings.API_V1_PREFIX}/internal/users/{user_id}"
