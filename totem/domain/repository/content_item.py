"""Content item repository interface."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from totem.domain.model.content_item import ContentItem
from totem.domain.value import ContentItemId

Mutator = Callable[[ContentItem], ContentItem]


class ContentItemRepository(ABC):
    """Repository for the ContentItem aggregate.

    Defines the contract for document persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, item_id: ContentItemId) -> Optional[ContentItem]:
        """Find a content item by ID.

        Args:
            item_id: The item's opaque identifier

        Returns:
            The item if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, item: ContentItem) -> ContentItem:
        """Save a content item (create or whole-document replace).

        Args:
            item: The item to save

        Returns:
            The saved item
        """
        pass

    @abstractmethod
    async def transactional_replace(
        self, item_id: ContentItemId, mutator: Mutator
    ) -> ContentItem:
        """Read, mutate and replace one document atomically.

        The mutator receives the document as read inside the transaction.
        If it raises, nothing is written and the error propagates.

        Args:
            item_id: The item to mutate
            mutator: Function from the current item to the new item

        Returns:
            The item as written

        Raises:
            NotFoundError: If the item does not exist
            ConcurrentModificationError: If the document changed between
                read and write
        """
        pass
