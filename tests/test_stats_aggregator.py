import asyncio
from datetime import datetime, timezone

import pytest

from stats import StatsAggregator, StatsReporter, StatsStore


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self):
        return self.now


async def _open(tmp_path):
    return await StatsStore.open(tmp_path / "stats.db")


def test_concurrent_record_events_lose_nothing(tmp_path):
    sizes = [(i * 37) % 1000 + 1 for i in range(150)]

    async def _run():
        store = await _open(tmp_path)
        try:
            clock = Clock(datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc))
            agg = StatsAggregator(store, clock=clock)

            async def _fire(size):
                await asyncio.sleep(0)
                return await agg.record_event(size)

            results = await asyncio.gather(*(_fire(s) for s in sizes))
            today = await StatsReporter(store, clock=clock).today()
            return results, today
        finally:
            await store.close()

    results, today = asyncio.run(_run())
    assert all(results)
    assert today.file_count == len(sizes)
    assert today.total_size == sum(sizes)


def test_day_boundary_splits_rows(tmp_path):
    async def _run():
        store = await _open(tmp_path)
        try:
            clock = Clock(datetime(2024, 3, 10, 23, 59, 59, 900000, tzinfo=timezone.utc))
            agg = StatsAggregator(store, clock=clock)
            await agg.record_event(10)
            clock.now = datetime(2024, 3, 11, 0, 0, 0, 100000, tzinfo=timezone.utc)
            await agg.record_event(20)
            return await store.get_day(clock.now.date().replace(day=10)), await store.get_day(clock.now.date())
        finally:
            await store.close()

    before, after = asyncio.run(_run())
    assert before == (1, 10)
    assert after == (1, 20)


def test_non_utc_clock_buckets_by_utc_day(tmp_path):
    from datetime import timedelta

    async def _run():
        store = await _open(tmp_path)
        try:
            # 2024-03-11 01:00 at +02:00 is still 2024-03-10 in UTC
            tz = timezone(timedelta(hours=2))
            agg = StatsAggregator(store, clock=lambda: datetime(2024, 3, 11, 1, 0, tzinfo=tz))
            await agg.record_event(5)
            from datetime import date
            return await store.get_day(date(2024, 3, 10))
        finally:
            await store.close()

    assert asyncio.run(_run()) == (1, 5)


def test_record_event_failure_returns_false(tmp_path):
    async def _run():
        store = await _open(tmp_path)
        agg = StatsAggregator(store)
        await store.close()  # store goes away underneath the aggregator
        return await agg.record_event(100)

    assert asyncio.run(_run()) is False


def test_negative_size_rejected(tmp_path):
    async def _run():
        store = await _open(tmp_path)
        try:
            agg = StatsAggregator(store)
            ok = await agg.record_event(-1)
            total = await store.sum_range()
            return ok, total
        finally:
            await store.close()

    assert asyncio.run(_run()) == (False, (0, 0))


def test_unopened_store_fails_at_construction(tmp_path):
    store = StatsStore(tmp_path / "never.db")
    with pytest.raises(RuntimeError):
        StatsAggregator(store)
    with pytest.raises(RuntimeError):
        StatsReporter(store)
    with pytest.raises(RuntimeError):
        StatsAggregator(None)
