from abc import ABC, abstractmethod


class IContentItemRepository(ABC):
    """ContentItem repository interface - application layer"""

    @abstractmethod
    async def reassign_owner(self, from_owner_id: str, to_owner_id: str) -> int:
        """Move every item owned by from_owner_id to to_owner_id. Returns rows moved."""
        pass
