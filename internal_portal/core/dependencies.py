"""
FastAPI dependency injection functions.

Provides Redis connections and the internal staff authentication gate.
"""

from __future__ import annotations

from uuid import UUID

import redis.asyncio as aioredis
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.config import settings
from internal_portal.core.database import get_db
from internal_portal.core.security import blacklist_redis_key, decode_access_token
from internal_portal.models.internal_user import InternalUser

# ---------------------------------------------------------------------------
# HTTP Bearer scheme (auto_error=False so we can return custom 401)
# ---------------------------------------------------------------------------

bearer_scheme = HTTPBearer(auto_error=False)

# ---------------------------------------------------------------------------
# Redis
# ---------------------------------------------------------------------------

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """
    Return a shared async Redis client.

    Uses a module-level pool so connections are reused across requests.
    """
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            str(settings.REDIS_URL),
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_pool


# ---------------------------------------------------------------------------
# Current staff member
# ---------------------------------------------------------------------------

def _unauthorized(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": code, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    redis: aioredis.Redis = Depends(get_redis),
) -> dict:
    """Decode the Bearer token and reject it when blacklisted."""
    if credentials is None:
        raise _unauthorized("MISSING_TOKEN", "Authorization header required")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise _unauthorized("INVALID_TOKEN", "Token is invalid or expired")

    if await redis.exists(blacklist_redis_key(payload.get("jti", ""))):
        raise _unauthorized("TOKEN_REVOKED", "Token has been revoked")

    return payload


async def get_current_internal_user(
    payload: dict = Depends(get_token_payload),
    db: AsyncSession = Depends(get_db),
) -> InternalUser:
    """
    Validate the Bearer JWT and return the authenticated staff member.

    Raises 401 if:
    - No token provided
    - Token is invalid, expired or not an internal token
    - JTI is blacklisted
    - Staff account does not exist or is inactive
    """
    try:
        internal_user_id = UUID(payload.get("sub", ""))
    except ValueError:
        raise _unauthorized("INVALID_TOKEN", "Token is invalid or expired")

    result = await db.execute(
        select(InternalUser).where(InternalUser.id == internal_user_id)
    )
    internal_user = result.scalar_one_or_none()

    if internal_user is None or not internal_user.is_active:
        raise _unauthorized("USER_NOT_FOUND", "Staff account not found or inactive")

    return internal_user
