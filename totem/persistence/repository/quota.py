"""PostgreSQL implementation of Quota repository."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import logfire
from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from totem.domain.model import QuotaCounter
from totem.domain.repository import QuotaRepository
from totem.domain.value import UserId
from totem.persistence.mappers import quota_to_dict, row_to_quota
from totem.persistence.tables import refresh_quotas_table


class PostgresQuotaRepository(QuotaRepository):
    """PostgreSQL implementation of QuotaRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user(self, user_id: UserId) -> Optional[QuotaCounter]:
        """Find a user's quota counter."""
        stmt = select(refresh_quotas_table).where(
            refresh_quotas_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_quota(row._asdict()) if row else None

    async def save(self, counter: QuotaCounter) -> QuotaCounter:
        """Save a quota counter (upsert)."""
        values = quota_to_dict(counter)
        stmt = insert(refresh_quotas_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[refresh_quotas_table.c.user_id],
            set_={
                "remaining": stmt.excluded.remaining,
                "reset_at": stmt.excluded.reset_at,
                "tier": stmt.excluded.tier,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return counter

    async def decrement(self, user_id: UserId) -> Optional[QuotaCounter]:
        """Decrement in SQL, only while something is left."""
        stmt = (
            update(refresh_quotas_table)
            .where(
                refresh_quotas_table.c.user_id == user_id,
                refresh_quotas_table.c.remaining > 0,
            )
            .values(remaining=refresh_quotas_table.c.remaining - 1)
            .returning(*refresh_quotas_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_quota(row._asdict()) if row else None

    @asynccontextmanager
    async def lock(self, user_id: UserId) -> AsyncIterator[None]:
        """Take a transaction-scoped advisory lock keyed by the user.

        The lock also covers users who have no row yet, and is released
        when the request session commits or rolls back, not on exit.
        """
        with logfire.span("quota_repository.lock", user_id=user_id):
            await self.session.execute(
                select(func.pg_advisory_xact_lock(func.hashtext(user_id)))
            )
        yield
