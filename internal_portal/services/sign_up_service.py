"""
Public sign-up business logic.

Creates platform user accounts. Every field rule is reported at once as a
422 with per-field messages.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from internal_portal.core.security import hash_password
from internal_portal.core.validation import TAKEN, is_blank
from internal_portal.models.user import User
from internal_portal.schemas.user import SignUpRequest, SignUpResponse
from internal_portal.services.user_store import email_taken, save_user
from internal_portal.services.validators import validate_sign_up

logger = logging.getLogger(__name__)


class SignUpService:
    """Handles account creation for platform users."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def sign_up(self, data: SignUpRequest) -> SignUpResponse:
        """
        Register a new user.

        - Validates email uniqueness
        - Normalizes a blank provider count to 0
        - Hashes password
        - Creates user record
        """
        email = data.email.strip().lower() if data.email else data.email
        user = User(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            organization=data.organization,
            organization_type=data.organization_type,
            num_providers=data.num_providers,
            address_1=data.address_1,
            address_2=data.address_2,
            city=data.city,
            state=data.state,
            zip=data.zip,
            agree_to_terms=data.agree_to_terms,
        )

        errors = validate_sign_up(user, data.password)
        if not is_blank(email) and await email_taken(self.db, email):
            errors.add("email", TAKEN)
        if "password" not in errors:
            user.password_hash = hash_password(data.password)

        errors = await save_user(self.db, user, errors)
        if errors:
            logger.info("Rejected sign-up: %s", errors.to_sentence())
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={
                    "code": "VALIDATION_FAILED",
                    "message": errors.to_sentence(),
                    "errors": errors.to_dict(),
                },
            )

        logger.info("Created user_id=%s", user.id)
        return SignUpResponse.model_validate(user)
