"""Repository interfaces for the totem domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from totem.domain.repository.content_item import ContentItemRepository, Mutator
from totem.domain.repository.quota import QuotaRepository

__all__ = [
    "ContentItemRepository",
    "Mutator",
    "QuotaRepository",
]
