"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from totem.config import (
    AuthSettings,
    DecaySettings,
    QuotaSettings,
    Settings,
    TransactionSettings,
)
from totem.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    Each nested section is exposed on its own so services depend only on
    the part they read.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_decay_settings(self, settings: Settings) -> DecaySettings:
        """Provide decay settings."""
        return settings.decay

    @provide(scope=Scope.APP)
    def provide_quota_settings(self, settings: Settings) -> QuotaSettings:
        """Provide refresh quota settings."""
        return settings.quota

    @provide(scope=Scope.APP)
    def provide_transaction_settings(self, settings: Settings) -> TransactionSettings:
        """Provide transaction retry settings."""
        return settings.transaction
