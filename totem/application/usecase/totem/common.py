"""Shared request and response models for label actions."""

from typing import Literal, Optional

from pydantic import BaseModel

from totem.domain.error import DomainError, QuotaExhaustedError
from totem.domain.model import ContentItem
from totem.domain.value import AnswerId

LabelAction = Literal["like", "unlike", "refresh"]


class LabelActionRequest(BaseModel):
    """Request targeting one label on a content item."""

    item_id: str
    label_name: str
    user_id: str  # User ID from authenticated user
    answer_id: Optional[str] = None
    now: Optional[int] = None  # Epoch ms; defaults to the wall clock


class LabelView(BaseModel):
    """A label as seen by the acting user after an action."""

    item_id: str
    answer_id: str
    label_name: str
    crispness: float
    likes: int
    liked_by: list[str]
    liked: bool
    last_like: Optional[int] = None


class LabelActionResponse(BaseModel):
    """Outcome of a label action.

    Failures are reported in-band: ``success`` is False and ``error``
    carries the stable error code.
    """

    success: bool
    action: LabelAction
    label: Optional[LabelView] = None
    remaining: Optional[int] = None
    error: Optional[str] = None
    message: Optional[str] = None


def label_view(
    item: ContentItem,
    label_name: str,
    user_id: str,
    answer_id: Optional[str] = None,
) -> Optional[LabelView]:
    """Build the view of a label on an updated item."""
    located = item.locate_label(
        label_name, AnswerId(answer_id) if answer_id else None
    )
    if located is None:
        return None

    index, label = located
    return LabelView(
        item_id=item.id,
        answer_id=item.answers[index].id,
        label_name=label.name,
        crispness=label.crispness,
        likes=label.aggregate.count,
        liked_by=list(label.aggregate.active_user_ids),
        liked=label.ledger.is_active_for(user_id),
        last_like=label.last_like,
    )


def failure(action: LabelAction, error: DomainError) -> LabelActionResponse:
    """Tagged failure response for a domain error."""
    return LabelActionResponse(
        success=False,
        action=action,
        error=error.code,
        message=str(error),
        remaining=error.remaining if isinstance(error, QuotaExhaustedError) else None,
    )
