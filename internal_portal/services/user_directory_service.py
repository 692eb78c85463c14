"""
User directory business logic.

Search, show, staff edits and CSV export of platform users.
"""

from __future__ import annotations

import csv
import logging
import math
from datetime import UTC, datetime
from io import StringIO
from typing import Any
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import raiseload

from internal_portal.core.config import settings
from internal_portal.core.paths import internal_user_path
from internal_portal.core.validation import TAKEN, Errors
from internal_portal.models.organization import Organization
from internal_portal.models.user import User
from internal_portal.schemas.outcome import Flash
from internal_portal.schemas.user import (
    OrganizationLink,
    UserActionResponse,
    UserEditResponse,
    UserListResponse,
    UserResponse,
    UserSearchParams,
    UserUpdateParams,
)
from internal_portal.services.user_search import UserSearch
from internal_portal.services.user_store import email_taken, save_user
from internal_portal.services.validators import validate_user_email

logger = logging.getLogger(__name__)

CSV_COLUMNS = (
    "id",
    "first_name",
    "last_name",
    "email",
    "organization",
    "organization_type",
    "address_1",
    "address_2",
    "city",
    "state",
    "zip",
    "agree_to_terms",
    "num_providers",
    "created_at",
    "updated_at",
)


def _csv_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def csv_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    return f"users-{now.strftime('%Y%m%dT%H%M')}.csv"


class UserDirectoryService:
    """Handles internal user directory operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Search
    # -----------------------------------------------------------------------

    async def search(
        self, params: UserSearchParams, scope: str | None, page: int = 1
    ) -> UserListResponse:
        """Newest users first, one page at a time."""
        stmt = UserSearch(params=params, scope=scope).results()
        per_page = settings.USERS_PER_PAGE
        page = max(page, 1)

        total = await self.db.scalar(select(func.count()).select_from(stmt.subquery())) or 0

        result = await self.db.execute(
            stmt.order_by(User.created_at.desc(), User.id)
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        users = list(result.scalars().all())

        return UserListResponse(
            users=[UserResponse.model_validate(u) for u in users],
            total=total,
            page=page,
            per_page=per_page,
            total_pages=math.ceil(total / per_page),
        )

    # -----------------------------------------------------------------------
    # Show / Edit
    # -----------------------------------------------------------------------

    async def get_user(self, user_id: UUID) -> User:
        result = await self.db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"code": "USER_NOT_FOUND", "message": "User not found"},
            )
        return user

    async def show(self, user_id: UUID) -> UserResponse:
        return UserResponse.model_validate(await self.get_user(user_id))

    async def edit(self, user_id: UUID) -> UserEditResponse:
        user = await self.get_user(user_id)
        result = await self.db.execute(select(Organization).order_by(Organization.name))
        return UserEditResponse(
            user=UserResponse.model_validate(user),
            organizations=[OrganizationLink.model_validate(o) for o in result.scalars().all()],
        )

    # -----------------------------------------------------------------------
    # Update
    # -----------------------------------------------------------------------

    async def _get_organizations(self, organization_ids: list[UUID]) -> list[Organization]:
        wanted = set(organization_ids)
        if not wanted:
            return []
        result = await self.db.execute(
            select(Organization).where(Organization.id.in_(wanted))
        )
        organizations = list(result.scalars().all())
        if len(organizations) != len(wanted):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"code": "ORG_NOT_FOUND", "message": "Organization not found"},
            )
        return organizations

    async def update(self, user_id: UUID, params: UserUpdateParams) -> UserActionResponse:
        """
        Apply a staff edit.

        - Only names, email and organization links can change
        - The full user rule set still runs before the write
        """
        user = await self.get_user(user_id)
        user_path = internal_user_path(user.id)
        errors = Errors()

        submitted = params.model_dump(exclude_unset=True, exclude={"organization_ids"})
        if isinstance(submitted.get("email"), str):
            submitted["email"] = submitted["email"].strip().lower()
            if submitted["email"] != user.email and await email_taken(
                self.db, submitted["email"], exclude_id=user.id
            ):
                errors.add("email", TAKEN)

        organizations = None
        if params.organization_ids is not None:
            organizations = await self._get_organizations(params.organization_ids)

        for field, value in submitted.items():
            setattr(user, field, value)
        if organizations is not None:
            user.organizations = organizations

        errors.merge(validate_user_email(user))
        errors = await save_user(self.db, user, errors)

        if errors:
            form_state = UserResponse.model_validate(user)
            await self.db.rollback()
            logger.info("Rejected update of user_id=%s: %s", user_id, errors.to_sentence())
            return UserActionResponse(
                flash=Flash.alert(f"Please correct errors: {errors.to_sentence()}"),
                render="edit",
                user=form_state,
                errors=errors.to_dict(),
            )

        logger.info("Updated user_id=%s", user_id)
        return UserActionResponse(
            flash=Flash.notice("User successfully updated."),
            redirect_to=user_path,
            user=UserResponse.model_validate(user),
        )

    # -----------------------------------------------------------------------
    # CSV export
    # -----------------------------------------------------------------------

    async def export_csv(self) -> tuple[str, str]:
        """
        Serialize every user, unscoped and unpaginated.

        Returns:
            Tuple of (csv_text, filename).
        """
        result = await self.db.execute(
            select(User).options(raiseload(User.organizations)).order_by(User.created_at, User.id)
        )

        output = StringIO()
        writer = csv.writer(output)
        writer.writerow(CSV_COLUMNS)
        for user in result.scalars().all():
            writer.writerow([_csv_value(getattr(user, column)) for column in CSV_COLUMNS])

        return output.getvalue(), csv_filename()
