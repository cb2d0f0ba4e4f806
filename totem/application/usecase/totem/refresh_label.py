"""Refresh label use case."""

import logfire

from totem.application.usecase.base import BaseUseCase
from totem.config import TransactionSettings
from totem.domain.error import DomainError
from totem.domain.service import RefreshService
from totem.domain.value import AnswerId, ContentItemId, UserId
from totem.util.retry import retry_on_conflict

from .common import LabelActionRequest, LabelActionResponse, failure, label_view


class RefreshLabelRequest(LabelActionRequest):
    """Refresh label request."""


class RefreshLabelUseCase(BaseUseCase[RefreshLabelRequest, LabelActionResponse]):
    """Use case for spending a refresh to restore a label's crispness."""

    def __init__(
        self,
        refresh_service: RefreshService,
        transaction_settings: TransactionSettings,
    ) -> None:
        """Initialize refresh label use case.

        Args:
            refresh_service: Refresh domain service
            transaction_settings: Retry policy for conflicting writes
        """
        self.refresh_service = refresh_service
        self.transaction_settings = transaction_settings

    async def execute(self, request: RefreshLabelRequest) -> LabelActionResponse:
        """Execute refresh flow.

        Args:
            request: Refresh label request

        Returns:
            Response with the updated label and the refreshes left today,
            or a tagged failure (``quota_exhausted`` carries ``remaining=0``)

        Raises:
            ConcurrentModificationError: If the write keeps conflicting
        """
        try:
            result = await retry_on_conflict(
                "refresh_label",
                lambda: self.refresh_service.refresh(
                    ContentItemId(request.item_id),
                    request.label_name,
                    UserId(request.user_id),
                    AnswerId(request.answer_id) if request.answer_id else None,
                    request.now,
                ),
                self.transaction_settings,
            )
        except DomainError as e:
            logfire.info("Refresh rejected", error=e.code, item_id=request.item_id)
            return failure("refresh", e)

        return LabelActionResponse(
            success=True,
            action="refresh",
            label=label_view(
                result.item, request.label_name, request.user_id, request.answer_id
            ),
            remaining=result.remaining,
        )
