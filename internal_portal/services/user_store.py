"""
User persistence.

Every write of a User goes through save_user so the provider count is
normalized and the full rule set runs right before the flush.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.validation import Errors
from internal_portal.models.user import User
from internal_portal.services.validators import provider_count, validate_user


async def email_taken(db: AsyncSession, email: str, exclude_id: UUID | None = None) -> bool:
    """Check uniqueness before the user is modified so no autoflush can run early."""
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    return (await db.execute(stmt.limit(1))).first() is not None


async def save_user(db: AsyncSession, user: User, errors: Errors | None = None) -> Errors:
    """
    Normalize, validate and flush a user.

    Args:
        db: Session the user belongs to (or is added to).
        user: New or modified user.
        errors: Failures already found by the caller (e.g. uniqueness).

    Returns:
        The error bag. Empty means the user was flushed.
    """
    if errors is None:
        errors = Errors()

    user.num_providers_to_zero_if_blank()
    errors.merge(validate_user(user))
    if errors:
        return errors

    user.num_providers = provider_count.validate_python(user.num_providers)
    db.add(user)
    await db.flush()
    return errors
