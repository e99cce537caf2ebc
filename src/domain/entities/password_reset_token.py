"""
PasswordResetToken Entity

Single-use password reset tokens.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - single-use password reset tokens.

    Business Rules:
    - Token value is a random UUID4 and is the lookup key
    - Issued for any email, known account or not
    - Expires 30 minutes after issuance
    - Single-use: used flips to True exactly once
    - email is not a foreign key; the row outlives the account
    """

    __tablename__ = "password_resets"

    token: str = Field(primary_key=True, max_length=64)
    email: str = Field(index=True, max_length=255)

    used: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_password_resets_expires_at", "expires_at"),)
