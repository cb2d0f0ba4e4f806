"""PostgreSQL implementation of ContentItem repository."""

from typing import Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from totem.adapter.error import ConcurrentModificationError
from totem.domain.error import NotFoundError
from totem.domain.model import ContentItem
from totem.domain.repository import ContentItemRepository, Mutator
from totem.domain.value import ContentItemId
from totem.persistence.mappers import content_item_to_dict, row_to_content_item
from totem.persistence.tables import content_items_table


class PostgresContentItemRepository(ContentItemRepository):
    """PostgreSQL implementation of ContentItemRepository.

    Each item is one JSONB document. Writes inside ``transactional_replace``
    are guarded by the row's version column: the update only applies if
    the version is still the one that was read.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, item_id: ContentItemId) -> Optional[ContentItem]:
        """Find a content item by ID."""
        with logfire.span("content_item_repository.find_by_id", item_id=item_id):
            stmt = select(content_items_table.c.document).where(
                content_items_table.c.id == item_id
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if not row:
                logfire.warn("Content item not found", item_id=item_id)
                return None
            return row_to_content_item(item_id, row.document)

    async def save(self, item: ContentItem) -> ContentItem:
        """Save a content item (insert or whole-document replace)."""
        with logfire.span("content_item_repository.save", item_id=item.id):
            document = content_item_to_dict(item)
            stmt = insert(content_items_table).values(id=item.id, document=document)
            stmt = stmt.on_conflict_do_update(
                index_elements=[content_items_table.c.id],
                set_={
                    "document": stmt.excluded.document,
                    "version": content_items_table.c.version + 1,
                    "updated_at": func.now(),
                },
            )
            await self.session.execute(stmt)
            await self.session.flush()
            return item

    async def transactional_replace(
        self, item_id: ContentItemId, mutator: Mutator
    ) -> ContentItem:
        """Read, mutate and replace one document under a version check."""
        with logfire.span(
            "content_item_repository.transactional_replace", item_id=item_id
        ):
            stmt = select(
                content_items_table.c.document, content_items_table.c.version
            ).where(content_items_table.c.id == item_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()
            if not row:
                raise NotFoundError("content item", item_id)

            updated = mutator(row_to_content_item(item_id, row.document))

            stmt = (
                update(content_items_table)
                .where(
                    content_items_table.c.id == item_id,
                    content_items_table.c.version == row.version,
                )
                .values(
                    document=content_item_to_dict(updated),
                    version=row.version + 1,
                    updated_at=func.now(),
                )
            )
            result = await self.session.execute(stmt)
            await self.session.flush()

            if result.rowcount == 0:  # type: ignore[attr-defined]
                logfire.warn(
                    "Content item version changed during transaction",
                    item_id=item_id,
                    read_version=row.version,
                )
                raise ConcurrentModificationError("content item", item_id)

            return updated
