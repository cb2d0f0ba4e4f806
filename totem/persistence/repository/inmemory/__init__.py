"""In-memory repository implementations for testing."""

from .content_item import InMemoryContentItemRepository
from .quota import InMemoryQuotaRepository

__all__ = [
    "InMemoryContentItemRepository",
    "InMemoryQuotaRepository",
]
