"""Crispness decay.

Pure functions, no I/O and no clock reads: the caller passes ``now``.
Each active endorsement is worth 100 when fresh and fades linearly to 0
over the decay window; a label's crispness is the mean over its active
endorsements.
"""

import math
from typing import Iterable

from totem.domain.model.endorsement import EndorsementRecord
from totem.domain.value import WEEK_MS

DECAY_WINDOW_MS: float = float(WEEK_MS)


def freshness_of(
    original_timestamp: int, now: int, window_ms: float = DECAY_WINDOW_MS
) -> float:
    """Freshness of one endorsement in [0, 100].

    ``max(0, 100 * (1 - age / window))``, clamped to 100 for timestamps
    ahead of ``now``. An infinite window never decays.
    """
    if math.isinf(window_ms):
        return 100.0
    age_ms = now - original_timestamp
    value = 100.0 * (1.0 - age_ms / window_ms)
    return min(100.0, max(0.0, value))


def crispness_of(
    active_records: Iterable[EndorsementRecord],
    now: int,
    window_ms: float = DECAY_WINDOW_MS,
) -> float:
    """Crispness of a label from its active endorsements.

    Args:
        active_records: Records currently counted as likes
        now: Current time in epoch milliseconds
        window_ms: Decay window; freshness reaches 0 at this age

    Returns:
        Mean freshness rounded to 2 decimals, 0 when there are no records
    """
    values = [
        freshness_of(r.original_timestamp, now, window_ms) for r in active_records
    ]
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return round(min(100.0, max(0.0, mean)), 2)
