"""
User Entity

Represents a registered account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow

DEFAULT_DISPLAY_NAME = "Anonymous"


class User(SQLModel, table=True):
    """
    User entity - a registered account.

    Business Rules:
    - Email is stored normalized (trimmed, lower-cased) and is unique
    - Password stored as a self-describing PBKDF2-SHA256 encoding
    - is_admin is never set from client input
    - password_hash is the only field changed after registration
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    display_name: str = Field(default=DEFAULT_DISPLAY_NAME, max_length=255)
    is_admin: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
