"""
Security utilities.

Password hashing and JWT access tokens for staff sessions.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt as _bcrypt
from jose import JWTError, jwt

from internal_portal.core.config import settings


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt (cost=12)."""
    password_bytes = password.encode("utf-8")[:72]
    salt = _bcrypt.gensalt(rounds=12)
    return _bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a bcrypt hash."""
    password_bytes = plain_password.encode("utf-8")[:72]
    return _bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


# ---------------------------------------------------------------------------
# JWT tokens
# ---------------------------------------------------------------------------

def create_access_token(internal_user_id: str, jti: str | None = None) -> tuple[str, str, int]:
    """
    Create a staff access token.

    Args:
        internal_user_id: The staff account's UUID as string.
        jti: Optional JWT ID. Generated if not provided.

    Returns:
        Tuple of (encoded_token, jti, expires_in_seconds).
    """
    now = datetime.now(UTC)
    expires_in = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60
    jti = jti or str(uuid.uuid4())
    payload: dict[str, Any] = {
        "sub": internal_user_id,
        "jti": jti,
        "type": "access",
        "scope": "internal",
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, jti, expires_in


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        JWTError: If the token is invalid, expired, or tampered.
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a staff access token.

    Raises:
        JWTError: If invalid, of the wrong type or not issued for the internal panel.
    """
    payload = decode_token(token)
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    if payload.get("scope") != "internal":
        raise JWTError("Not an internal token")
    return payload


# ---------------------------------------------------------------------------
# Redis key helpers
# ---------------------------------------------------------------------------

def blacklist_redis_key(jti: str) -> str:
    """Redis key for a blacklisted access token JTI. Format: blacklist:{jti}"""
    return f"blacklist:{jti}"
