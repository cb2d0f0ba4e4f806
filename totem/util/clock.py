"""Wall-clock access.

The engine takes ``now`` as epoch milliseconds everywhere; this is the only
place that reads the system clock.
"""

import time


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)
