"""Persistence providers.

The production component backs both repositories with one request-scoped
PostgreSQL session. A refresh writes the content item and decrements the
quota through that session, so both land in the same commit.
"""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from totem.adapter.error import ConcurrentModificationError
from totem.config import Settings
from totem.domain.repository import ContentItemRepository, QuotaRepository
from totem.persistence.database import create_engine, create_session_factory
from totem.persistence.repository import (
    PostgresContentItemRepository,
    PostgresQuotaRepository,
)
from totem.util.di.base import ProviderBase
from totem.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Repositories for content items and refresh quotas."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """PostgreSQL-backed repositories."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """One engine per process, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Request session, committed when the request succeeds.

        Version conflicts are expected under contention and are logged at
        warn; any other failure rolls back at error.
        """
        async with session_factory() as session:
            try:
                yield session
            except ConcurrentModificationError as e:
                await session.rollback()
                logfire.warn("Session rolled back on version conflict", error=str(e))
                raise
            except Exception as e:
                await session.rollback()
                logfire.error(
                    "Session rolled back", error=str(e), error_type=type(e).__name__
                )
                raise
            else:
                await session.commit()

    @provide(scope=Scope.REQUEST)
    def get_content_item_repository(
        self, session: AsyncSession
    ) -> ContentItemRepository:
        return PostgresContentItemRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_quota_repository(self, session: AsyncSession) -> QuotaRepository:
        return PostgresQuotaRepository(session)
