from datetime import datetime
from typing import Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        """Get password reset token by its value"""
        stmt = (
            select(PasswordResetToken)
            .where(PasswordResetToken.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_used_if_valid(self, token: str, email: str, now: datetime) -> bool:
        """Conditional UPDATE; the row count decides who consumed the token"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.token == token,
                PasswordResetToken.email == email,
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at > now,
            )
            .values(used=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
