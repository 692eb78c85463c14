"""
User ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin
from internal_portal.models.organization_user_assignment import OrganizationUserAssignment

if TYPE_CHECKING:
    from internal_portal.models.organization import Organization


class User(Base, UUIDMixin, TimestampMixin):
    """A platform account created through sign-up."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Requested affiliation, as typed at sign-up
    organization: Mapped[str] = mapped_column(String(255), nullable=False)
    organization_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    num_providers: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)

    # Address
    address_1: Mapped[str] = mapped_column(String(255), nullable=False)
    address_2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False)
    zip: Mapped[str] = mapped_column(String(10), nullable=False)

    agree_to_terms: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    organizations: Mapped[list[Organization]] = relationship(
        "Organization",
        secondary=OrganizationUserAssignment.__table__,
        order_by="Organization.name",
        lazy="selectin",
    )

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def num_providers_to_zero_if_blank(self) -> None:
        """Store 0 instead of a blank provider count."""
        value = self.num_providers
        if value is None or (isinstance(value, str) and value.strip() == ""):
            self.num_providers = 0

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
