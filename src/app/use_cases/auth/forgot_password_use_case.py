"""
Forgot Password Use Case

Issues a password reset token and schedules the reset email.
"""

import logging
from datetime import datetime, timedelta
from html import escape
from typing import Callable, Optional
from urllib.parse import urlencode, urlsplit

from src.app.services.auth_settings import AuthSettings
from src.app.services.email_gateway import EmailMessage
from src.app.services.reset_token_manager import ResetTokenManager
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.libs.result import Result, Return
from .common import normalize_email
from .dtos import ForgotPasswordResponse

logger = logging.getLogger(__name__)

RESET_EMAIL_SUBJECT = "Reset your password"


def _origin(url: str) -> Optional[str]:
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        return None
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def resolve_base_url(requested: Optional[str], settings: AuthSettings) -> str:
    """
    Pick the base URL for a reset link

    A client-supplied base is used only when its origin is the configured
    app origin or one of the allowed origins; any other base falls back to
    the configured app URL.
    """
    if not requested:
        return settings.app_base_url

    trusted = {_origin(settings.app_base_url)}
    trusted.update(_origin(origin) for origin in settings.allowed_origins)
    trusted.discard(None)

    if _origin(requested) in trusted:
        return requested.strip()

    logger.warning(f"Ignoring untrusted reset link base: {requested!r}")
    return settings.app_base_url


def build_reset_link(base_url: str, token: str, email: str) -> str:
    query = urlencode({"token": token, "email": email})
    return f"{base_url.rstrip('/')}/reset-password?{query}"


def build_reset_email(email: str, link: str, ttl_minutes: int) -> EmailMessage:
    safe_link = escape(link, quote=True)
    html = (
        "<p>We received a request to reset your password.</p>"
        f'<p><a href="{safe_link}">Reset your password</a></p>'
        f"<p>This link expires in {ttl_minutes} minutes. "
        "If you did not request a reset, you can ignore this email.</p>"
    )
    return EmailMessage(to=email, subject=RESET_EMAIL_SUBJECT, html=html)


class ForgotPasswordUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - A token is issued and an email scheduled for every request, whether
      or not the account exists (no email enumeration)
    - Response is always {success: true}
    - Delivery happens after the response; failures are only logged
    - The link base is the configured app URL unless the client names a
      trusted origin
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        schedule_email: Callable[[EmailMessage], None],
        now: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.settings = settings
        self.schedule_email = schedule_email
        self.now = now

    async def execute(
        self, email: str, base_url: Optional[str] = None
    ) -> Result[ForgotPasswordResponse]:
        """
        Execute forgot password use case.

        Args:
            email: Email address the reset is requested for
            base_url: Front-end origin for the reset link; honored only for
                trusted origins, otherwise AuthSettings.app_base_url

        Returns:
            Result with ForgotPasswordResponse (always success)
        """
        email = normalize_email(email)

        async with self.uow:
            manager = ResetTokenManager(
                self.uow.password_reset_tokens,
                ttl=timedelta(minutes=self.settings.reset_token_ttl_minutes),
                now=self.now,
            )
            reset_token = await manager.issue(email)
            await self.uow.commit()
            link = build_reset_link(
                resolve_base_url(base_url, self.settings), reset_token.token, email
            )

        self.schedule_email(
            build_reset_email(email, link, self.settings.reset_token_ttl_minutes)
        )

        return Return.ok(ForgotPasswordResponse(success=True))
