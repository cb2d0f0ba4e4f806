"""Projection between the ledger and the legacy flat like shape.

Older readers expect ``likes`` and ``likedBy`` on each label, and older
documents were written as parallel ``likedBy``/``likeTimes``/``likeValues``
arrays with no ledger at all. The ledger is authoritative: the flat shape
is recomputed from it on every write, and legacy arrays are only read to
build a ledger for documents that predate it.
"""

from typing import Optional, Sequence

import logfire

from totem.domain.model.endorsement import EndorsementRecord
from totem.domain.model.label import Label, LegacyAggregate
from totem.domain.model.ledger import EngagementLedger
from totem.domain.service.decay import DECAY_WINDOW_MS, crispness_of
from totem.domain.value import UserId


def project(ledger: EngagementLedger) -> LegacyAggregate:
    """Flat like summary of a ledger."""
    active = ledger.active_records()
    return LegacyAggregate(
        count=len(active),
        active_user_ids=[r.user_id for r in active],
    )


def apply_projection(
    label: Label, now: int, window_ms: float = DECAY_WINDOW_MS
) -> Label:
    """Recompute every derived field of a label from its ledger.

    Args:
        label: Label whose ledger was just changed
        now: Current time in epoch milliseconds
        window_ms: Decay window

    Returns:
        Label with fresh crispness and aggregate
    """
    return label.model_copy(
        update={
            "crispness": crispness_of(label.ledger.active_records(), now, window_ms),
            "aggregate": project(label.ledger),
            "updated_at": now,
            "last_interaction": now,
        }
    )


def reconcile_legacy(
    liked_by: Sequence[str],
    like_times: Optional[Sequence[Optional[int]]] = None,
    like_values: Optional[Sequence[Optional[int]]] = None,
) -> EngagementLedger:
    """Build a ledger from legacy parallel arrays.

    Every legacy entry was an active like. When ``like_times`` is given,
    entries beyond the shorter array are dropped; a missing time counts as
    epoch 0, i.e. fully decayed. A user listed twice keeps the earliest
    time.

    Args:
        liked_by: User IDs, one per like
        like_times: Epoch ms per like, parallel to ``liked_by``
        like_values: Like weights, parallel to ``liked_by``

    Returns:
        Ledger with one active record per distinct user
    """
    if like_times is not None and len(like_times) != len(liked_by):
        logfire.warn(
            "Legacy like arrays have mismatched lengths",
            liked_by=len(liked_by),
            like_times=len(like_times),
        )
        size = min(len(liked_by), len(like_times))
    else:
        size = len(liked_by)

    by_user: dict[str, EndorsementRecord] = {}
    for index in range(size):
        user_id = liked_by[index]
        if not user_id:
            continue
        timestamp = (like_times[index] if like_times is not None else None) or 0
        value = 1
        if like_values is not None and index < len(like_values):
            value = max(1, like_values[index] or 1)

        existing = by_user.get(user_id)
        if existing is not None and existing.original_timestamp <= timestamp:
            continue
        by_user[user_id] = EndorsementRecord(
            user_id=UserId(user_id),
            original_timestamp=timestamp,
            last_updated_at=timestamp,
            is_active=True,
            value=value,
        )

    return EngagementLedger(records=list(by_user.values()))


def merge_duplicate_records(
    records: Sequence[EndorsementRecord],
) -> EngagementLedger:
    """Build a ledger from records that may repeat a user.

    Documents written before the one-record-per-user rule can hold several
    entries for a user. They collapse into one record, in first-seen order:
    active if any entry was active, with the earliest original timestamp
    and the latest update time.
    """
    merged: dict[str, EndorsementRecord] = {}
    for record in records:
        existing = merged.get(record.user_id)
        if existing is None:
            merged[record.user_id] = record
            continue
        merged[record.user_id] = existing.model_copy(
            update={
                "is_active": existing.is_active or record.is_active,
                "original_timestamp": min(
                    existing.original_timestamp, record.original_timestamp
                ),
                "last_updated_at": max(
                    existing.last_updated_at, record.last_updated_at
                ),
            }
        )

    if len(merged) != len(records):
        logfire.warn(
            "Merged duplicate endorsement records",
            records=len(records),
            users=len(merged),
        )
    return EngagementLedger(records=list(merged.values()))
