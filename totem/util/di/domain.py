"""Domain layer DI providers."""

from dishka import Scope, provide

from totem.config import AuthSettings, DecaySettings, QuotaSettings
from totem.domain.repository import ContentItemRepository, QuotaRepository
from totem.domain.service import (
    JWTService,
    QuotaService,
    RefreshService,
    ToggleService,
)
from totem.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_quota_service(
        self, quota_repository: QuotaRepository, quota_settings: QuotaSettings
    ) -> QuotaService:
        """Provide refresh quota domain service."""
        return QuotaService(
            quota_repository=quota_repository, quota_settings=quota_settings
        )

    @provide
    def get_toggle_service(
        self,
        content_item_repository: ContentItemRepository,
        decay_settings: DecaySettings,
    ) -> ToggleService:
        """Provide label toggle domain service."""
        return ToggleService(
            content_item_repository=content_item_repository,
            decay_settings=decay_settings,
        )

    @provide
    def get_refresh_service(
        self,
        content_item_repository: ContentItemRepository,
        quota_service: QuotaService,
        decay_settings: DecaySettings,
    ) -> RefreshService:
        """Provide label refresh domain service."""
        return RefreshService(
            content_item_repository=content_item_repository,
            quota_service=quota_service,
            decay_settings=decay_settings,
        )
