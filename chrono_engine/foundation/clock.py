"""Monotonic clock utilities.

Regeneration is driven by elapsed wall-clock time between ticks.  This
module is the single source of "now" so tests can monkey-patch it trivially.
"""

from __future__ import annotations

import time


def monotonic_seconds() -> float:
    """Return a monotonic timestamp in seconds (never goes backwards)."""
    return time.monotonic()
