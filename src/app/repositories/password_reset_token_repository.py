from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[PasswordResetToken]:
        """Get password reset token by its value"""
        pass

    @abstractmethod
    async def mark_used_if_valid(self, token: str, email: str, now: datetime) -> bool:
        """
        Flip used to True in a single conditional write.

        The write only applies when the token exists, belongs to email, is
        unused and expires after now. Returns True when exactly this call
        performed the flip.
        """
        pass
