"""Label like/unlike domain service."""

from typing import Optional

import logfire

from totem.config import DecaySettings
from totem.domain.error import AlreadyInactiveError, LabelNotFoundError
from totem.domain.model.content_item import ContentItem
from totem.domain.model.label import Label
from totem.domain.repository import ContentItemRepository
from totem.domain.value import AnswerId, ContentItemId, Direction, UserId

from .base import Service
from .consistency import apply_projection


def relabel(
    item: ContentItem,
    label_name: str,
    answer_id: Optional[AnswerId],
    change,
    now: int,
) -> ContentItem:
    """Apply ``change`` to one label of an item and return the new item.

    ``change`` maps the located label to its replacement. Shared by the
    toggle and refresh flows so both locate labels the same way.

    Raises:
        LabelNotFoundError: If no answer carries the label
    """
    located = item.locate_label(label_name, answer_id)
    if located is None:
        raise LabelNotFoundError(item.id, label_name)

    index, label = located
    answer = item.answers[index].with_label(change(label), now)
    return item.with_answer(index, answer, now)


class ToggleService(Service):
    """Domain service for endorsing and un-endorsing labels."""

    def __init__(
        self,
        content_item_repository: ContentItemRepository,
        decay_settings: DecaySettings,
    ) -> None:
        """Initialize toggle service.

        Args:
            content_item_repository: Content item repository
            decay_settings: Decay window and re-like policy
        """
        self.content_item_repository = content_item_repository
        self.decay_settings = decay_settings

    async def toggle(
        self,
        item_id: ContentItemId,
        label_name: str,
        user_id: UserId,
        direction: Direction,
        answer_id: Optional[AnswerId] = None,
        now: Optional[int] = None,
    ) -> ContentItem:
        """Like or unlike a label on a content item.

        The ledger change, crispness and legacy aggregate are computed from
        the document as read inside one store transaction, then the whole
        item is replaced.

        Args:
            item_id: Content item ID
            label_name: Exact label name
            user_id: Acting user
            direction: Like or unlike
            answer_id: Target a specific answer instead of the first match
            now: Current time in epoch milliseconds

        Returns:
            The updated content item

        Raises:
            NotFoundError: If the item does not exist
            LabelNotFoundError: If no answer carries the label
            AlreadyInactiveError: If unliking without an active like
        """
        now = self.resolve_now(now)

        with logfire.span(
            "toggle_label",
            item_id=item_id,
            label_name=label_name,
            user_id=user_id,
            direction=direction.value,
        ):

            def change(label: Label) -> Label:
                if direction == Direction.LIKE:
                    ledger = label.ledger.upsert_activate(
                        user_id,
                        now,
                        reset_age_on_relike=self.decay_settings.reset_age_on_relike,
                    )
                else:
                    ledger = label.ledger.deactivate(user_id, now)
                return apply_projection(
                    label.model_copy(update={"ledger": ledger}),
                    now,
                    self.decay_settings.window_ms,
                )

            def mutate(item: ContentItem) -> ContentItem:
                return relabel(item, label_name, answer_id, change, now)

            try:
                updated = await self.content_item_repository.transactional_replace(
                    item_id, mutate
                )
            except AlreadyInactiveError:
                logfire.warn(
                    "Unlike without an active like",
                    item_id=item_id,
                    label_name=label_name,
                    user_id=user_id,
                )
                raise
            except LabelNotFoundError:
                logfire.warn(
                    "Toggle on missing label", item_id=item_id, label_name=label_name
                )
                raise

            logfire.info(
                "Label toggled",
                item_id=item_id,
                label_name=label_name,
                user_id=user_id,
                direction=direction.value,
            )
            return updated

    async def like(
        self,
        item_id: ContentItemId,
        label_name: str,
        user_id: UserId,
        answer_id: Optional[AnswerId] = None,
        now: Optional[int] = None,
    ) -> ContentItem:
        """Like a label. Liking an already liked label succeeds unchanged."""
        return await self.toggle(
            item_id, label_name, user_id, Direction.LIKE, answer_id, now
        )

    async def unlike(
        self,
        item_id: ContentItemId,
        label_name: str,
        user_id: UserId,
        answer_id: Optional[AnswerId] = None,
        now: Optional[int] = None,
    ) -> ContentItem:
        """Unlike a label. Raises AlreadyInactiveError if not liked."""
        return await self.toggle(
            item_id, label_name, user_id, Direction.UNLIKE, answer_id, now
        )
