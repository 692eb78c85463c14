"""
Staff authentication endpoints.

Login, logout, me.
"""

from __future__ import annotations

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.database import get_db
from internal_portal.core.dependencies import (
    get_current_internal_user,
    get_redis,
    get_token_payload,
)
from internal_portal.models.internal_user import InternalUser
from internal_portal.schemas.auth import LoginRequest, MeResponse, TokenResponse
from internal_portal.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    redis: aioredis.Redis = Depends(get_redis),
) -> AuthService:
    """Dependency that constructs AuthService."""
    return AuthService(db=db, redis=redis)


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------

@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
)
async def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Authenticate a staff member. Returns a JWT access token."""
    return await service.login(data)


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------

@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout and revoke the access token",
)
async def logout(
    payload: dict = Depends(get_token_payload),
    current_user: InternalUser = Depends(get_current_internal_user),
    service: AuthService = Depends(get_auth_service),
) -> dict[str, str]:
    await service.logout(payload)
    return {"message": "Logged out successfully"}


# ---------------------------------------------------------------------------
# Me
# ---------------------------------------------------------------------------

@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current staff profile",
)
async def get_me(
    current_user: InternalUser = Depends(get_current_internal_user),
    service: AuthService = Depends(get_auth_service),
) -> MeResponse:
    return await service.get_me(current_user)
