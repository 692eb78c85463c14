"""
OrganizationUserAssignment ORM model.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin


class OrganizationUserAssignment(Base, UUIDMixin, TimestampMixin):
    """Join table linking platform users to the organizations they act for."""

    __tablename__ = "organization_user_assignments"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", name="uq_organization_user_assignment"),
    )

    organization_id: Mapped[UUID] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<OrganizationUserAssignment organization_id={self.organization_id} "
            f"user_id={self.user_id}>"
        )
