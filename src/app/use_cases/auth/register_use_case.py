"""
Register Use Case

Creates an account and returns a session token.
"""

import logging

from src.api.utils.jwt import TokenIssuer, session_claims
from src.app.services.auth_settings import AuthSettings
from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import DEFAULT_DISPLAY_NAME, User
from src.domain.exceptions import EmailAlreadyExistsError
from src.libs.result import Error, Result, Return
from .common import (
    INVALID_PASSWORD,
    merge_anonymous_content,
    normalize_email,
    password_too_short_message,
)
from .dtos import AuthResponse, RegisterCommand, UserInfo

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthResponse] (session token + public user info)

    Business Logic:
    1. Normalize email (trim, lower-case)
    2. Enforce minimum password length (configurable)
    3. Reject an email that is already registered
    4. Hash password (PBKDF2-SHA256) and insert the user; the storage
       unique constraint is authoritative for duplicates
    5. Commit and issue a 7-day session token
    6. Merge anonymous content best-effort
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: PasswordHasher,
        token_issuer: TokenIssuer,
        settings: AuthSettings,
    ):
        self.uow = uow
        self.hasher = hasher
        self.token_issuer = token_issuer
        self.settings = settings

    async def execute(self, command: RegisterCommand) -> Result[AuthResponse]:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, password, optional display name
                and anonymous id

        Returns:
            Result[AuthResponse], or Error

        Errors:
            - INVALID_PASSWORD: Password shorter than the configured minimum
            - EMAIL_ALREADY_EXISTS: Normalized email is taken
        """
        email = normalize_email(command.email)

        if len(command.password) < self.settings.min_password_length:
            return Return.err(
                Error(
                    INVALID_PASSWORD,
                    password_too_short_message(self.settings.min_password_length),
                )
            )

        display_name = (command.display_name or "").strip() or DEFAULT_DISPLAY_NAME
        password_hash = self.hasher.hash(command.password)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            user = User(
                email=email,
                password_hash=password_hash,
                display_name=display_name,
                is_admin=False,
            )
            try:
                user = await self.uow.users.create(user)
            except EmailAlreadyExistsError:
                # Lost a race with a concurrent registration
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            await self.uow.commit()
            logger.info(f"User registered: {user.id}")

            token = self.token_issuer.issue(session_claims(user))
            response = AuthResponse(token=token, user=UserInfo.from_user(user))

            if command.anonymous_id:
                await merge_anonymous_content(self.uow, command.anonymous_id, user)

            return Return.ok(response)
