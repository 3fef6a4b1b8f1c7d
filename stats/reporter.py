"""Read-only rollups over the daily counters.

Each query is computed fresh. ``complete`` isolates failures: a sub-query
that errors contributes its zero value instead of aborting the report.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from logger import log
from .store import StatsStore
from .types import DailyCounter, RollupView, WeeklyCounter, utc_now, utc_today

__all__ = ["StatsReporter"]


class StatsReporter:
    def __init__(self, store: StatsStore, clock: Callable[[], datetime] = utc_now):
        if store is None or not store.is_open:
            raise RuntimeError("StatsReporter requires an open StatsStore")
        self.store = store
        self.clock = clock

    async def _day(self, offset: int) -> DailyCounter:
        day = utc_today(self.clock) - timedelta(days=offset)
        row = await self.store.get_day(day)
        if row is None:
            return DailyCounter(day)
        return DailyCounter(day, row[0], row[1])

    async def today(self) -> DailyCounter:
        return await self._day(0)

    async def yesterday(self) -> DailyCounter:
        return await self._day(1)

    async def last_week(self) -> WeeklyCounter:
        end = utc_today(self.clock)
        start = end - timedelta(days=7)
        count, size = await self.store.sum_range(start, end)
        return WeeklyCounter(start, end, count, size)

    async def total(self) -> DailyCounter:
        count, size = await self.store.sum_range()
        return DailyCounter(utc_today(self.clock), count, size)

    async def complete(self) -> RollupView:
        today = utc_today(self.clock)
        zero_week = WeeklyCounter(today - timedelta(days=7), today)
        return RollupView(
            today=await self._guard("today", self.today, DailyCounter(today)),
            yesterday=await self._guard("yesterday", self.yesterday, DailyCounter(today - timedelta(days=1))),
            last_week=await self._guard("last_week", self.last_week, zero_week),
            total=await self._guard("total", self.total, DailyCounter(today)),
        )

    @staticmethod
    async def _guard(name: str, query, fallback):
        try:
            return await query()
        except Exception as e:  # noqa: BLE001
            log.warning("Stats query %s failed: %s", name, e)
            return fallback
