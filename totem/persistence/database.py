"""Async engine and sessions for the document store.

Content items are JSONB documents guarded by a version column. Lost
updates are caught by the versioned UPDATE itself, so sessions run at the
default READ COMMITTED level and no row locks are taken.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from totem.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine.

    Args:
        settings: Application settings; SQL is echoed in debug mode

    Returns:
        Engine with a bounded pool and a server-side statement timeout
    """
    database = settings.database
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        isolation_level="READ COMMITTED",
        connect_args={
            "server_settings": {
                "statement_timeout": str(database.statement_timeout_ms),
                "application_name": "totem-ledger",
            }
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Objects stay usable after commit; repositories flush explicitly.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
