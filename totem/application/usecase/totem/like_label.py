"""Like label use case."""

import logfire

from totem.application.usecase.base import BaseUseCase
from totem.config import TransactionSettings
from totem.domain.error import DomainError
from totem.domain.service import ToggleService
from totem.domain.value import AnswerId, ContentItemId, UserId
from totem.util.retry import retry_on_conflict

from .common import LabelActionRequest, LabelActionResponse, failure, label_view


class LikeLabelRequest(LabelActionRequest):
    """Like label request."""


class LikeLabelUseCase(BaseUseCase[LikeLabelRequest, LabelActionResponse]):
    """Use case for endorsing a label on a content item."""

    def __init__(
        self,
        toggle_service: ToggleService,
        transaction_settings: TransactionSettings,
    ) -> None:
        """Initialize like label use case.

        Args:
            toggle_service: Toggle domain service
            transaction_settings: Retry policy for conflicting writes
        """
        self.toggle_service = toggle_service
        self.transaction_settings = transaction_settings

    async def execute(self, request: LikeLabelRequest) -> LabelActionResponse:
        """Execute like flow.

        Liking a label the user already likes succeeds without changing the
        ledger.

        Args:
            request: Like label request

        Returns:
            Response with the updated label, or a tagged failure

        Raises:
            ConcurrentModificationError: If the write keeps conflicting
        """
        try:
            item = await retry_on_conflict(
                "like_label",
                lambda: self.toggle_service.like(
                    ContentItemId(request.item_id),
                    request.label_name,
                    UserId(request.user_id),
                    AnswerId(request.answer_id) if request.answer_id else None,
                    request.now,
                ),
                self.transaction_settings,
            )
        except DomainError as e:
            logfire.info("Like rejected", error=e.code, item_id=request.item_id)
            return failure("like", e)

        return LabelActionResponse(
            success=True,
            action="like",
            label=label_view(
                item, request.label_name, request.user_id, request.answer_id
            ),
        )
