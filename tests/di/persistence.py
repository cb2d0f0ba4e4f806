"""Mock persistence providers for testing."""

from dishka import Scope, provide

from totem.domain.repository import ContentItemRepository, QuotaRepository
from totem.persistence.repository.inmemory import (
    InMemoryContentItemRepository,
    InMemoryQuotaRepository,
)
from totem.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so that state survives across requests made against one
    container (e2e tests issue several HTTP calls). Each test builds its
    own container, so tests stay isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_content_item_repository(self) -> ContentItemRepository:
        """Provide in-memory content item repository."""
        return InMemoryContentItemRepository()

    @provide(scope=Scope.APP)
    def get_quota_repository(self) -> QuotaRepository:
        """Provide in-memory quota repository."""
        return InMemoryQuotaRepository()
