"""In-memory content item repository for testing."""

import asyncio
import copy
from typing import Any, Dict, Optional

from totem.adapter.error import ConcurrentModificationError
from totem.domain.error import NotFoundError
from totem.domain.model import ContentItem
from totem.domain.repository import ContentItemRepository, Mutator
from totem.domain.value import ContentItemId
from totem.persistence.mappers import content_item_to_dict, row_to_content_item


class InMemoryContentItemRepository(ContentItemRepository):
    """In-memory implementation of ContentItemRepository for testing.

    Items are kept as stored documents, so reads go through the same mappers
    as the PostgreSQL repository and raw legacy documents can be seeded.
    """

    def __init__(self) -> None:
        self._documents: dict[ContentItemId, Dict[str, Any]] = {}
        self._versions: dict[ContentItemId, int] = {}
        self._lock = asyncio.Lock()
        self._pending_conflicts = 0

    def put_document(self, item_id: ContentItemId, document: Dict[str, Any]) -> None:
        """Store a raw document as-is."""
        self._documents[item_id] = copy.deepcopy(document)
        self._versions[item_id] = self._versions.get(item_id, 0) + 1

    def get_document(self, item_id: ContentItemId) -> Optional[Dict[str, Any]]:
        """Return a copy of the raw stored document."""
        document = self._documents.get(item_id)
        return copy.deepcopy(document) if document is not None else None

    def version_of(self, item_id: ContentItemId) -> int:
        """Current version of an item (0 if absent)."""
        return self._versions.get(item_id, 0)

    def fail_next_commits(self, count: int) -> None:
        """Make the next ``count`` transactional writes lose their version race."""
        self._pending_conflicts = count

    async def find_by_id(self, item_id: ContentItemId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        document = self._documents.get(item_id)
        if document is None:
            return None
        return row_to_content_item(item_id, document)

    async def save(self, item: ContentItem) -> ContentItem:
        """Save a content item."""
        async with self._lock:
            self.put_document(item.id, content_item_to_dict(item))
        return item

    async def transactional_replace(
        self, item_id: ContentItemId, mutator: Mutator
    ) -> ContentItem:
        """Read, mutate and replace one document under a version check."""
        document = self._documents.get(item_id)
        if document is None:
            raise NotFoundError("content item", item_id)
        read_version = self._versions[item_id]

        updated = mutator(row_to_content_item(item_id, document))

        async with self._lock:
            if self._pending_conflicts > 0:
                self._pending_conflicts -= 1
                self._versions[item_id] += 1
            if self._versions[item_id] != read_version:
                raise ConcurrentModificationError("content item", item_id)
            self._documents[item_id] = content_item_to_dict(updated)
            self._versions[item_id] = read_version + 1

        return updated
