"""
Internal user directory endpoints.

Search, CSV download, show, edit, update.
"""

from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.database import get_db
from internal_portal.schemas.user import (
    UserActionResponse,
    UserEditResponse,
    UserListResponse,
    UserResponse,
    UserSearchParams,
    UserUpdateParams,
)
from internal_portal.services.user_directory_service import UserDirectoryService

router = APIRouter()


def get_user_directory_service(db: AsyncSession = Depends(get_db)) -> UserDirectoryService:
    """Dependency that constructs UserDirectoryService."""
    return UserDirectoryService(db=db)


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=UserListResponse,
    summary="Search users",
)
async def list_users(
    keyword: str | None = Query(default=None, max_length=200),
    requested_org: str | None = Query(default=None, max_length=255),
    created_after: date | None = Query(default=None),
    created_before: date | None = Query(default=None),
    org_type: str | None = Query(default=None, description="all, vendor, provider, assigned or unassigned"),
    page: int = Query(default=1, ge=1),
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> UserListResponse:
    """Newest first, paginated. Unknown org_type values search all users."""
    params = UserSearchParams(
        keyword=keyword,
        requested_org=requested_org,
        created_after=created_after,
        created_before=created_before,
    )
    return await service.search(params, scope=org_type, page=page)


# ---------------------------------------------------------------------------
# Download
# ---------------------------------------------------------------------------

@router.get(
    "/download",
    summary="Download every user as CSV",
    response_class=Response,
)
async def download_users(
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> Response:
    content, filename = await service.export_csv()
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# ---------------------------------------------------------------------------
# Show / Edit
# ---------------------------------------------------------------------------

@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
)
async def get_user(
    user_id: UUID,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> UserResponse:
    return await service.show(user_id)


@router.get(
    "/{user_id}/edit",
    response_model=UserEditResponse,
    summary="Load a user for editing",
)
async def edit_user(
    user_id: UUID,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> UserEditResponse:
    return await service.edit(user_id)


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

@router.patch(
    "/{user_id}",
    response_model=UserActionResponse,
    summary="Update a user",
)
async def update_user(
    user_id: UUID,
    response: Response,
    params: UserUpdateParams | None = None,
    service: UserDirectoryService = Depends(get_user_directory_service),
) -> UserActionResponse:
    """
    Only first_name, last_name, email and organization_ids are applied.
    Answers 422 with the submitted state when a rule fails.
    """
    outcome = await service.update(user_id, params or UserUpdateParams())
    if not outcome.succeeded:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return outcome
