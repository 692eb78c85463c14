"""
User search.

Turns raw query parameters and a scope into a filterable SELECT over users.
Ordering and pagination are left to the caller.
"""

from __future__ import annotations

from datetime import UTC, datetime, time

from sqlalchemy import Select, exists, or_, select

from internal_portal.models.enums import OrganizationType
from internal_portal.models.organization_user_assignment import OrganizationUserAssignment
from internal_portal.models.user import User
from internal_portal.schemas.user import UserSearchParams

SCOPES = ("all", "vendor", "provider", "assigned", "unassigned")


class UserSearch:
    def __init__(self, params: UserSearchParams, scope: str | None = None) -> None:
        self.params = params
        self.scope = scope if scope in SCOPES else "all"

    def results(self) -> Select[tuple[User]]:
        stmt = self._apply_scope(select(User))
        return self._apply_params(stmt)

    def _apply_scope(self, stmt: Select[tuple[User]]) -> Select[tuple[User]]:
        vendor = OrganizationType.health_it_vendor.value
        assigned = exists().where(OrganizationUserAssignment.user_id == User.id)

        if self.scope == "vendor":
            return stmt.where(User.organization_type == vendor)
        if self.scope == "provider":
            return stmt.where(
                or_(User.organization_type.is_(None), User.organization_type != vendor)
            )
        if self.scope == "assigned":
            return stmt.where(assigned)
        if self.scope == "unassigned":
            return stmt.where(~assigned)
        return stmt

    def _apply_params(self, stmt: Select[tuple[User]]) -> Select[tuple[User]]:
        params = self.params

        if params.keyword:
            keyword = params.keyword.strip()
            stmt = stmt.where(
                or_(
                    User.first_name.icontains(keyword, autoescape=True),
                    User.last_name.icontains(keyword, autoescape=True),
                    User.email.icontains(keyword, autoescape=True),
                    User.organization.icontains(keyword, autoescape=True),
                )
            )

        if params.requested_org:
            stmt = stmt.where(
                User.organization.icontains(params.requested_org.strip(), autoescape=True)
            )

        if params.created_after:
            since = datetime.combine(params.created_after, time.min, tzinfo=UTC)
            stmt = stmt.where(User.created_at >= since)

        if params.created_before:
            until = datetime.combine(params.created_before, time.max, tzinfo=UTC)
            stmt = stmt.where(User.created_at <= until)

        return stmt
