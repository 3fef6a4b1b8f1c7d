from __future__ import annotations

from typing import Callable
from datetime import datetime

from logger import log
from .store import StatsStore
from .types import utc_now, utc_today

__all__ = ["StatsAggregator"]


class StatsAggregator:
    """Sole writer of the daily counters.

    ``record_event`` never raises: a failed write is logged and reported as
    ``False`` so link issuance keeps going.
    """

    def __init__(self, store: StatsStore, clock: Callable[[], datetime] = utc_now):
        if store is None or not store.is_open:
            raise RuntimeError("StatsAggregator requires an open StatsStore")
        self.store = store
        self.clock = clock

    async def record_event(self, size_bytes: int) -> bool:
        if size_bytes < 0:
            log.warning("Ignoring stats event with negative size %s", size_bytes)
            return False
        day = utc_today(self.clock)
        try:
            await self.store.increment(day, size_bytes)
        except Exception as e:  # noqa: BLE001
            log.error("Failed to record file processing for %s: %s", day, e)
            return False
        return True
