"""
Request usage counters.

Every inbound HTTP request increments a counter keyed by
``"<METHOD> <path>"``.  Paths are not normalised: a trailing slash or a
query string produces a separate key.  Counters only ever grow; the
whole mapping is rewritten after each increment like any other
collection.
"""

from __future__ import annotations

import logging
from typing import Dict

from travel_map_api.app.core.store import load_collection, save_collection

logger = logging.getLogger(__name__)

STATS_COLLECTION = "stats"


class StatisticsService:
    """Service maintaining per-endpoint request counts."""

    @staticmethod
    def counter_key(method: str, path: str) -> str:
        return f"{method} {path}"

    @classmethod
    async def increment(cls, method: str, path: str) -> int:
        """Add one to the counter for ``method`` and ``path`` and return the new count."""
        key = cls.counter_key(method, path)
        stats = load_collection(STATS_COLLECTION)
        current = stats.get(key)
        # Non-integer values can only come from a hand-edited file.
        count = (current if isinstance(current, int) and not isinstance(current, bool) else 0) + 1
        stats[key] = count
        save_collection(STATS_COLLECTION, stats)
        return count

    @classmethod
    async def snapshot(cls) -> Dict[str, int]:
        """Return the current counts."""
        return load_collection(STATS_COLLECTION)
