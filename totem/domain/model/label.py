"""Label ("totem") entity.

A named tag on one answer. Its crispness and like aggregate are derived
from the engagement ledger and recomputed on every write.
"""

from typing import Optional

from pydantic import Field

from totem.domain.model.common import DomainModel
from totem.domain.model.ledger import EngagementLedger
from totem.domain.value import UserId
from totem.domain.value.common import ValueObject


class LegacyAggregate(ValueObject):
    """Flat like summary that older readers expect.

    Always a projection of the ledger; never written independently.
    """

    count: int = Field(default=0, ge=0)
    active_user_ids: list[UserId] = Field(default_factory=list)


class Label(DomainModel):
    """A label attached to an answer.

    Identity is (answer, name); the same name on another answer has an
    independent ledger.
    """

    name: str = Field(min_length=1)
    crispness: float = Field(default=0.0, ge=0.0, le=100.0)
    ledger: EngagementLedger = Field(default_factory=EngagementLedger)
    aggregate: LegacyAggregate = Field(default_factory=LegacyAggregate)
    last_like: Optional[int] = None  # Epoch ms of the latest refresh
    updated_at: Optional[int] = None
    last_interaction: Optional[int] = None
