"""Label refresh domain service.

A refresh is the only paid lever over decay: it restarts the age of the
user's own endorsement and costs one unit of the daily quota. The quota is
charged only after the content write has succeeded, so a failure never
costs anything; a crash between the two writes under-charges instead.
Concurrent refreshes by one user are serialized on the quota lock, so
they cannot both spend the same remaining unit.
"""

from typing import Optional

import logfire

from totem.config import DecaySettings
from totem.domain.error import NotLikedError, QuotaExhaustedError
from totem.domain.model.common import DomainModel
from totem.domain.model.content_item import ContentItem
from totem.domain.model.label import Label
from totem.domain.repository import ContentItemRepository
from totem.domain.value import AnswerId, ContentItemId, UserId

from .base import Service
from .consistency import apply_projection
from .quota_service import QuotaService
from .toggle_service import relabel


class RefreshResult(DomainModel):
    """Outcome of a successful refresh."""

    item: ContentItem
    remaining: int


class RefreshService(Service):
    """Domain service for quota-gated refreshes."""

    def __init__(
        self,
        content_item_repository: ContentItemRepository,
        quota_service: QuotaService,
        decay_settings: DecaySettings,
    ) -> None:
        """Initialize refresh service.

        Args:
            content_item_repository: Content item repository
            quota_service: Quota domain service
            decay_settings: Decay window
        """
        self.content_item_repository = content_item_repository
        self.quota_service = quota_service
        self.decay_settings = decay_settings

    async def refresh(
        self,
        item_id: ContentItemId,
        label_name: str,
        user_id: UserId,
        answer_id: Optional[AnswerId] = None,
        now: Optional[int] = None,
    ) -> RefreshResult:
        """Restart the decay clock of the user's like on a label.

        Args:
            item_id: Content item ID
            label_name: Exact label name
            user_id: Acting user
            answer_id: Target a specific answer instead of the first match
            now: Current time in epoch milliseconds

        Returns:
            Updated item and the refreshes left today

        Raises:
            QuotaExhaustedError: If the user has no refreshes left
            NotFoundError: If the item does not exist
            LabelNotFoundError: If no answer carries the label
            NotLikedError: If the user has no active like on the label
        """
        now = self.resolve_now(now)

        with logfire.span(
            "refresh_label", item_id=item_id, label_name=label_name, user_id=user_id
        ):
            # Check, write and charge as one unit per user
            async with self.quota_service.lock_user(user_id):
                remaining = await self.quota_service.get_remaining(user_id, now)
                if remaining <= 0:
                    logfire.info("Refresh quota exhausted", user_id=user_id)
                    raise QuotaExhaustedError(user_id, remaining=0)

                def change(label: Label) -> Label:
                    ledger = label.ledger.reset_timestamp(user_id, now)
                    return apply_projection(
                        label.model_copy(update={"ledger": ledger, "last_like": now}),
                        now,
                        self.decay_settings.window_ms,
                    )

                def mutate(item: ContentItem) -> ContentItem:
                    return relabel(item, label_name, answer_id, change, now)

                try:
                    updated = await self.content_item_repository.transactional_replace(
                        item_id, mutate
                    )
                except NotLikedError:
                    logfire.warn(
                        "Refresh without an active like",
                        item_id=item_id,
                        label_name=label_name,
                        user_id=user_id,
                    )
                    raise

                # Charge only once the content write went through
                remaining = await self.quota_service.decrement(user_id, now)

                logfire.info(
                    "Label refreshed",
                    item_id=item_id,
                    label_name=label_name,
                    user_id=user_id,
                    remaining=remaining,
                )
                return RefreshResult(item=updated, remaining=remaining)
