"""
Reset Password Use Case

Consumes a reset token and sets a new password.
"""

import logging
from datetime import datetime
from typing import Callable

from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import PasswordHasher
from src.app.services.reset_token_manager import INVALID_TOKEN, ResetTokenManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Error, Result, Return
from .common import INVALID_PASSWORD, normalize_email, password_too_short_message
from .dtos import ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - New password must meet the configured minimum length
    - Token claim and password write commit in one transaction; if the
      password write fails the token stays unused
    - A token for an email with no account is refused
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        settings: AuthSettings,
        now: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.hasher = hasher
        self.settings = settings
        self.now = now

    async def execute(
        self, email: str, token: str, new_password: str
    ) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            email: Email the token was issued for
            token: Reset token from the email link
            new_password: New password to set

        Returns:
            Result with ResetPasswordResponse, or Error

        Errors:
            - INVALID_PASSWORD: Password shorter than the configured minimum
            - INVALID_TOKEN: Unknown token, email mismatch or no such account
            - TOKEN_USED: Token already consumed
            - TOKEN_EXPIRED: Token past its expiry
        """
        if len(new_password) < self.settings.min_password_length:
            return Return.err(
                Error(
                    INVALID_PASSWORD,
                    password_too_short_message(self.settings.min_password_length),
                )
            )

        email = normalize_email(email)
        # Derive before claiming so the write transaction stays short
        password_hash = self.hasher.hash(new_password)

        async with self.uow:
            manager = ResetTokenManager(self.uow.password_reset_tokens, now=self.now)
            claim = await manager.claim(token, email)
            if claim.is_err():
                logger.info(f"Password reset refused: {claim.error.code}")
                return Return.err(claim.error)

            user = await self.uow.users.get_by_email(email)
            if user is None:
                logger.info("Password reset refused: no account for token email")
                return Return.err(Error(INVALID_TOKEN, "Invalid password reset token"))

            user.password_hash = password_hash
            await self.uow.users.update(user)

            await self.uow.commit()
            logger.info(f"Password reset completed for user {user.id}")

        return Return.ok(ResetPasswordResponse(success=True))
