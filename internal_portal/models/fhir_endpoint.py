"""
FhirEndpoint ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from internal_portal.models.registered_organization import RegisteredOrganization


class FhirEndpoint(Base, UUIDMixin, TimestampMixin):
    """
    Network address the platform uses to reach an organization's FHIR server.

    Managed endpoints carry system defaults and are never edited by staff.
    """

    __tablename__ = "fhir_endpoints"

    registered_organization_id: Mapped[UUID] = mapped_column(
        ForeignKey("registered_organizations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    uri: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str | None] = mapped_column(String(30), nullable=True)
    managed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    registered_organization: Mapped[RegisteredOrganization] = relationship(
        "RegisteredOrganization", back_populates="fhir_endpoint"
    )

    @property
    def kind(self) -> str:
        return "default" if self.managed else "editable"

    def __repr__(self) -> str:
        return f"<FhirEndpoint id={self.id} kind={self.kind} uri={self.uri!r}>"
