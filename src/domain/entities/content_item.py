"""
ContentItem Entity

Content owned by a user or an anonymous client. Only the owner column is
used here, for merging anonymous content into a registered account.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class ContentItem(SQLModel, table=True):
    __tablename__ = "content_items"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # Anonymous client id or str(User.id)
    user_id: str = Field(index=True, max_length=255)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
