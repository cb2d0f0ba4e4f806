"""PostgreSQL repository implementations."""

from totem.persistence.repository.content_item import PostgresContentItemRepository
from totem.persistence.repository.quota import PostgresQuotaRepository

__all__ = [
    "PostgresContentItemRepository",
    "PostgresQuotaRepository",
]
