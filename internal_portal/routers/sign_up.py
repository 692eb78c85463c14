"""
Public sign-up endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.database import get_db
from internal_portal.schemas.user import SignUpRequest, SignUpResponse
from internal_portal.services.sign_up_service import SignUpService

router = APIRouter()


def get_sign_up_service(db: AsyncSession = Depends(get_db)) -> SignUpService:
    """Dependency that constructs SignUpService."""
    return SignUpService(db=db)


@router.post(
    "",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a platform user account",
)
async def sign_up(
    data: SignUpRequest,
    service: SignUpService = Depends(get_sign_up_service),
) -> SignUpResponse:
    """
    Create an account.

    - Email must be unique
    - Terms of service must be accepted
    - A blank provider count is stored as 0
    """
    return await service.sign_up(data)
