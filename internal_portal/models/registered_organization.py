"""
RegisteredOrganization ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from internal_portal.models.fhir_endpoint import FhirEndpoint
    from internal_portal.models.organization import Organization


class RegisteredOrganization(Base, UUIDMixin, TimestampMixin):
    """An Organization's access grant to one platform API environment."""

    __tablename__ = "registered_organizations"
    __table_args__ = (
        UniqueConstraint("organization_id", "api_env", name="uq_registered_organization_api_env"),
    )

    organization_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    api_env: Mapped[str] = mapped_column(String(20), nullable=False)

    # Relationships
    organization: Mapped[Organization] = relationship(
        "Organization", back_populates="registered_organizations"
    )
    fhir_endpoint: Mapped[FhirEndpoint | None] = relationship(
        "FhirEndpoint",
        back_populates="registered_organization",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<RegisteredOrganization id={self.id} organization_id={self.organization_id} "
            f"api_env={self.api_env!r}>"
        )
