"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
Import order matters: base models before dependent models.
"""

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin
from internal_portal.models.organization_user_assignment import OrganizationUserAssignment
from internal_portal.models.organization import Organization
from internal_portal.models.registered_organization import RegisteredOrganization
from internal_portal.models.fhir_endpoint import FhirEndpoint
from internal_portal.models.user import User
from internal_portal.models.internal_user import InternalUser

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "Organization",
    "RegisteredOrganization",
    "FhirEndpoint",
    "User",
    "OrganizationUserAssignment",
    "InternalUser",
]
