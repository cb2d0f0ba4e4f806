"""Application layer DI providers."""

from dishka import Scope, provide

from totem.application.usecase.totem import (
    GetRefreshQuotaUseCase,
    LikeLabelUseCase,
    RefreshLabelUseCase,
    UnlikeLabelUseCase,
)
from totem.config import QuotaSettings, TransactionSettings
from totem.domain.service import QuotaService, RefreshService, ToggleService
from totem.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_like_label_use_case(
        self,
        toggle_service: ToggleService,
        transaction_settings: TransactionSettings,
    ) -> LikeLabelUseCase:
        """Provide like label use case."""
        return LikeLabelUseCase(
            toggle_service=toggle_service,
            transaction_settings=transaction_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_unlike_label_use_case(
        self,
        toggle_service: ToggleService,
        transaction_settings: TransactionSettings,
    ) -> UnlikeLabelUseCase:
        """Provide unlike label use case."""
        return UnlikeLabelUseCase(
            toggle_service=toggle_service,
            transaction_settings=transaction_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_label_use_case(
        self,
        refresh_service: RefreshService,
        transaction_settings: TransactionSettings,
    ) -> RefreshLabelUseCase:
        """Provide refresh label use case."""
        return RefreshLabelUseCase(
            refresh_service=refresh_service,
            transaction_settings=transaction_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_refresh_quota_use_case(
        self, quota_service: QuotaService, quota_settings: QuotaSettings
    ) -> GetRefreshQuotaUseCase:
        """Provide get refresh quota use case."""
        return GetRefreshQuotaUseCase(
            quota_service=quota_service, quota_settings=quota_settings
        )
