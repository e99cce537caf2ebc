"""
Login Use Case

Authenticates a user and returns a session token.
"""

from typing import Optional

from src.api.utils.jwt import TokenIssuer, session_claims
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.libs.result import Error, Result, Return
from .common import merge_anonymous_content, normalize_email
from .dtos import AuthResponse, UserInfo


class LoginUseCase:
    """
    Use case for user login and session token issuance.

    Business Rules:
    - Unknown email and wrong password produce the same error
    - A hash derivation runs even when the user does not exist
    - Anonymous content is merged best-effort on success
    """

    def __init__(self, uow: UnitOfWork, hasher: PasswordHasher, token_issuer: TokenIssuer):
        self.uow = uow
        self.hasher = hasher
        self.token_issuer = token_issuer

    async def execute(
        self, email: str, password: str, anonymous_id: Optional[str] = None
    ) -> Result[AuthResponse]:
        """
        Execute login use case.

        Args:
            email: User email (normalized here)
            password: Plain text password
            anonymous_id: Optional client id whose content is merged

        Returns:
            Result with AuthResponse, or Error(INVALID_CREDENTIALS)
        """
        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                self.hasher.dummy_verify(password)
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not self.hasher.verify(password, user.password_hash):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            token = self.token_issuer.issue(session_claims(user))
            response = AuthResponse(token=token, user=UserInfo.from_user(user))

            if anonymous_id:
                await merge_anonymous_content(self.uow, anonymous_id, user)

            return Return.ok(response)
