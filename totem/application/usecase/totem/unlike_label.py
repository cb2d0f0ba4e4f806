"""Unlike label use case."""

import logfire

from totem.application.usecase.base import BaseUseCase
from totem.config import TransactionSettings
from totem.domain.error import DomainError
from totem.domain.service import ToggleService
from totem.domain.value import AnswerId, ContentItemId, UserId
from totem.util.retry import retry_on_conflict

from .common import LabelActionRequest, LabelActionResponse, failure, label_view


class UnlikeLabelRequest(LabelActionRequest):
    """Unlike label request."""


class UnlikeLabelUseCase(BaseUseCase[UnlikeLabelRequest, LabelActionResponse]):
    """Use case for withdrawing an endorsement from a label."""

    def __init__(
        self,
        toggle_service: ToggleService,
        transaction_settings: TransactionSettings,
    ) -> None:
        """Initialize unlike label use case.

        Args:
            toggle_service: Toggle domain service
            transaction_settings: Retry policy for conflicting writes
        """
        self.toggle_service = toggle_service
        self.transaction_settings = transaction_settings

    async def execute(self, request: UnlikeLabelRequest) -> LabelActionResponse:
        """Execute unlike flow.

        The user's record is kept but deactivated, so a later like resumes
        its original age.

        Args:
            request: Unlike label request

        Returns:
            Response with the updated label, or a tagged failure
            (``already_inactive`` if the user has no active like)

        Raises:
            ConcurrentModificationError: If the write keeps conflicting
        """
        try:
            item = await retry_on_conflict(
                "unlike_label",
                lambda: self.toggle_service.unlike(
                    ContentItemId(request.item_id),
                    request.label_name,
                    UserId(request.user_id),
                    AnswerId(request.answer_id) if request.answer_id else None,
                    request.now,
                ),
                self.transaction_settings,
            )
        except DomainError as e:
            logfire.info("Unlike rejected", error=e.code, item_id=request.item_id)
            return failure("unlike", e)

        return LabelActionResponse(
            success=True,
            action="unlike",
            label=label_view(
                item, request.label_name, request.user_id, request.answer_id
            ),
        )
