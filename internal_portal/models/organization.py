"""
Organization ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from internal_portal.models.registered_organization import RegisteredOrganization


class Organization(Base, UUIDMixin, TimestampMixin):
    """A provider or vendor organization using the platform."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    organization_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    npi: Mapped[str | None] = mapped_column(String(10), nullable=True, unique=True)

    # Relationships
    registered_organizations: Mapped[list[RegisteredOrganization]] = relationship(
        "RegisteredOrganization",
        back_populates="organization",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RegisteredOrganization.api_env",
    )

    def registered_organization_for(self, api_env: str) -> RegisteredOrganization | None:
        for registered_organization in self.registered_organizations:
            if registered_organization.api_env == api_env:
                return registered_organization
        return None

    def __repr__(self) -> str:
        return f"<Organization id={self.id} name={self.name!r}>"
