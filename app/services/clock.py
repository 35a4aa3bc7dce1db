"""
Wall-clock helper. All timestamps are integer epoch milliseconds.
"""

import time


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)
