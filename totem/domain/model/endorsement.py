"""Endorsement record.

One user's like on one label. Records are flipped between active and
inactive, never deleted, so the original timestamp survives an unlike.
"""

from pydantic import Field

from totem.domain.model.common import DomainModel
from totem.domain.value import UserId


class EndorsementRecord(DomainModel):
    """A single entry in a label's engagement ledger.

    Timestamps are epoch milliseconds.
    """

    user_id: UserId
    original_timestamp: int  # Decay age basis; only a refresh moves it
    last_updated_at: int
    is_active: bool = True
    value: int = Field(default=1, ge=1)
