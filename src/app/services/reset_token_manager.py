"""
Reset Token Manager

Issues and consumes single-use password reset tokens.
"""

from datetime import datetime, timedelta
from typing import Callable
from uuid import uuid4

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.base import utcnow
from src.domain.entities import PasswordResetToken
from src.libs.result import Error, Result, Return

INVALID_TOKEN = "INVALID_TOKEN"
TOKEN_USED = "TOKEN_USED"
TOKEN_EXPIRED = "TOKEN_EXPIRED"


class ResetTokenManager:
    """
    Password reset token lifecycle: issued -> used, or issued -> expired.

    Business Rules:
    - Token value is a random UUID4 (122 bits of entropy)
    - Tokens are issued whether or not the email has an account
    - Expiry is a fixed window from issuance
    - Claiming is one conditional write; the check and the flip of `used`
      cannot be split by a concurrent request
    - Caller owns the transaction (commit/rollback via the unit of work)
    """

    def __init__(
        self,
        tokens: IPasswordResetTokenRepository,
        ttl: timedelta = timedelta(minutes=30),
        now: Callable[[], datetime] = utcnow,
    ):
        self.tokens = tokens
        self.ttl = ttl
        self.now = now

    async def issue(self, email: str) -> PasswordResetToken:
        created_at = self.now()
        token = PasswordResetToken(
            token=str(uuid4()),
            email=email,
            used=False,
            created_at=created_at,
            expires_at=created_at + self.ttl,
        )
        return await self.tokens.create(token)

    async def claim(self, token: str, email: str) -> Result[PasswordResetToken]:
        """
        Atomically validate and consume a token.

        Returns:
            Result with the consumed token, or Error

        Errors:
            - INVALID_TOKEN: Unknown token or token issued for another email
            - TOKEN_USED: Token was already consumed
            - TOKEN_EXPIRED: Token is past its expiry (left unused)
        """
        now = self.now()
        if await self.tokens.mark_used_if_valid(token, email, now):
            claimed = await self.tokens.get_by_token(token)
            return Return.ok(claimed)

        # The write was refused; read only to report why
        existing = await self.tokens.get_by_token(token)
        if existing is None or existing.email != email:
            return Return.err(Error(INVALID_TOKEN, "Invalid password reset token"))
        if existing.used:
            return Return.err(Error(TOKEN_USED, "Password reset token has already been used"))
        if existing.expires_at <= now:
            return Return.err(Error(TOKEN_EXPIRED, "Password reset token has expired"))
        return Return.err(Error(INVALID_TOKEN, "Invalid password reset token"))
