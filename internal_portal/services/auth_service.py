"""
Staff authentication business logic.

Handles login, logout and the current staff profile for the internal panel.
Routers only handle HTTP concerns.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import redis.asyncio as aioredis
from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.config import settings
from internal_portal.core.security import (
    blacklist_redis_key,
    create_access_token,
    verify_password,
)
from internal_portal.models.internal_user import InternalUser
from internal_portal.schemas.auth import LoginRequest, MeResponse, TokenResponse

logger = logging.getLogger(__name__)


class AuthService:
    """Handles staff authentication operations."""

    def __init__(self, db: AsyncSession, redis: aioredis.Redis) -> None:
        self.db = db
        self.redis = redis

    # -----------------------------------------------------------------------
    # Login
    # -----------------------------------------------------------------------

    async def login(self, data: LoginRequest) -> TokenResponse:
        """
        Authenticate a staff member with email + password.

        Raises 401 for invalid credentials (never reveals which field is wrong).
        """
        result = await self.db.execute(
            select(InternalUser).where(InternalUser.email == data.email.lower())
        )
        internal_user = result.scalar_one_or_none()

        if internal_user is None or not verify_password(data.password, internal_user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"code": "INVALID_CREDENTIALS", "message": "Invalid email or password"},
            )

        if not internal_user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"code": "ACCOUNT_DISABLED", "message": "Account is disabled"},
            )

        token, _, expires_in = create_access_token(str(internal_user.id))
        logger.info("Staff login internal_user_id=%s", internal_user.id)
        return TokenResponse(access_token=token, expires_in=expires_in)

    # -----------------------------------------------------------------------
    # Logout
    # -----------------------------------------------------------------------

    async def logout(self, payload: dict) -> None:
        """Blacklist the access token JTI until the token would have expired anyway."""
        ttl = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60
        exp = payload.get("exp")
        if isinstance(exp, int | float):
            ttl = max(int(exp - datetime.now(UTC).timestamp()), 1)

        await self.redis.setex(blacklist_redis_key(payload.get("jti", "")), ttl, "1")
        logger.info("Staff logout internal_user_id=%s", payload.get("sub"))

    # -----------------------------------------------------------------------
    # Me
    # -----------------------------------------------------------------------

    async def get_me(self, internal_user: InternalUser) -> MeResponse:
        return MeResponse.model_validate(internal_user)
