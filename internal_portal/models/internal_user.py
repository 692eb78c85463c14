"""
InternalUser ORM model.
"""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from internal_portal.models.base import Base, TimestampMixin, UUIDMixin


class InternalUser(Base, UUIDMixin, TimestampMixin):
    """A staff account allowed into the internal panel."""

    __tablename__ = "internal_users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<InternalUser id={self.id} email={self.email!r}>"
