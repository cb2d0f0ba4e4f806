"""Domain model entities for the totem engine."""

from totem.domain.model.content_item import Answer, ContentItem
from totem.domain.model.endorsement import EndorsementRecord
from totem.domain.model.label import Label, LegacyAggregate
from totem.domain.model.ledger import EngagementLedger
from totem.domain.model.quota import QuotaCounter

__all__ = [
    "Answer",
    "ContentItem",
    "EndorsementRecord",
    "EngagementLedger",
    "Label",
    "LegacyAggregate",
    "QuotaCounter",
]
