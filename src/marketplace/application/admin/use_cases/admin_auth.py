"""Admin authentication use cases."""

from __future__ import annotations

import logging
from typing import Optional

from ....domain.admin.admin_repository import AdminRepository
from ....domain.admin.entities import AdminUser
from ....domain.errors import InvalidCredentialsError, ValidationError
from ....security.passwords import (
    MAX_PASSWORD_BYTES,
    hash_password,
    password_too_long,
    verify_password,
)
from ....security.tokens import ADMIN_COLLECTION, TokenService
from ..dtos import AdminLoginResponseDTO, AdminSummaryDTO

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Service for back-office logins.

    Unknown emails and wrong passwords are indistinguishable to the caller.
    """

    def __init__(self, admin_repository: AdminRepository, tokens: TokenService):
        self.admin_repository = admin_repository
        self.tokens = tokens

    async def authenticate(self, email: str, password: str) -> AdminLoginResponseDTO:
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("Email and password are required")

        admin = await self.admin_repository.get_by_email(email)
        if not admin or not verify_password(password, admin.password_hash):
            logger.info("Failed admin login for %s", email)
            raise InvalidCredentialsError("Invalid email or password")

        token = self.tokens.create_access_token(
            str(admin.id), ADMIN_COLLECTION, email=admin.email, role=admin.role
        )
        return AdminLoginResponseDTO(
            token=token,
            user=AdminSummaryDTO(id=str(admin.id), email=admin.email, role=admin.role),
        )

    async def ensure_bootstrap_admin(
        self, email: Optional[str], password: Optional[str]
    ) -> Optional[AdminUser]:
        """Create the configured admin account if it does not exist yet."""
        if not email or not password:
            return None
        if password_too_long(password):
            raise ValidationError(
                f"Admin password must be at most {MAX_PASSWORD_BYTES} bytes"
            )
        email = email.strip().lower()
        existing = await self.admin_repository.get_by_email(email)
        if existing:
            return existing

        admin = AdminUser(
            email=email, password_hash=hash_password(password), role="super-admin"
        )
        created = await self.admin_repository.create(admin)
        logger.info("Created bootstrap admin %s", email)
        return created
