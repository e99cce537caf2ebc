from sqlalchemy import update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.content_item_repository import IContentItemRepository
from src.domain.entities import ContentItem


class ContentItemRepository(IContentItemRepository):
    """ContentItem repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def reassign_owner(self, from_owner_id: str, to_owner_id: str) -> int:
        """Move every item owned by from_owner_id to to_owner_id"""
        stmt = (
            update(ContentItem)
            .where(ContentItem.user_id == from_owner_id)
            .values(user_id=to_owner_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
