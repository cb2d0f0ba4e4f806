"""Label action use cases."""

from .common import LabelActionRequest, LabelActionResponse, LabelView
from .get_refresh_quota import (
    GetRefreshQuotaRequest,
    GetRefreshQuotaResponse,
    GetRefreshQuotaUseCase,
)
from .like_label import LikeLabelRequest, LikeLabelUseCase
from .refresh_label import RefreshLabelRequest, RefreshLabelUseCase
from .unlike_label import UnlikeLabelRequest, UnlikeLabelUseCase

__all__ = [
    "LabelActionRequest",
    "LabelActionResponse",
    "LabelView",
    "GetRefreshQuotaRequest",
    "GetRefreshQuotaResponse",
    "GetRefreshQuotaUseCase",
    "LikeLabelRequest",
    "LikeLabelUseCase",
    "RefreshLabelRequest",
    "RefreshLabelUseCase",
    "UnlikeLabelRequest",
    "UnlikeLabelUseCase",
]
