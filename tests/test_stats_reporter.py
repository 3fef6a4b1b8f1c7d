import asyncio
from datetime import date, datetime, timezone

from stats import DailyCounter, StatsAggregator, StatsReporter, StatsStore


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self):
        return self.now


def test_example_scenario(tmp_path):
    async def _run():
        store = await StatsStore.open(tmp_path / "stats.db")
        try:
            clock = Clock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
            agg = StatsAggregator(store, clock=clock)
            await asyncio.gather(*(agg.record_event(s) for s in (1000, 2000, 500)))
            clock.now = datetime(2024, 5, 2, 9, 0, tzinfo=timezone.utc)
            await asyncio.gather(*(agg.record_event(s) for s in (300, 700)))
            rep = StatsReporter(store, clock=clock)
            return await rep.complete()
        finally:
            await store.close()

    view = asyncio.run(_run())
    assert (view.today.file_count, view.today.total_size) == (2, 1000)
    assert (view.yesterday.file_count, view.yesterday.total_size) == (3, 3500)
    assert view.last_week.total_size == 3500  # today is excluded from the window
    assert (view.total.file_count, view.total.total_size) == (5, 4500)


def test_last_week_window_is_half_open(tmp_path):
    async def _run():
        store = await StatsStore.open(tmp_path / "stats.db")
        try:
            # today = 2024-05-10; window = [2024-05-03, 2024-05-10)
            for day, size in ((date(2024, 5, 2), 1), (date(2024, 5, 3), 10), (date(2024, 5, 9), 100), (date(2024, 5, 10), 1000)):
                await store.increment(day, size)
            rep = StatsReporter(store, clock=lambda: datetime(2024, 5, 10, 12, tzinfo=timezone.utc))
            return await rep.last_week(), await rep.total()
        finally:
            await store.close()

    week, total = asyncio.run(_run())
    assert week.start == date(2024, 5, 3) and week.end == date(2024, 5, 10)
    assert (week.file_count, week.total_size) == (2, 110)
    assert (total.file_count, total.total_size) == (4, 1111)


def test_empty_history_is_all_zero(tmp_path):
    async def _run():
        store = await StatsStore.open(tmp_path / "stats.db")
        try:
            rep = StatsReporter(store, clock=lambda: datetime(2024, 1, 1, tzinfo=timezone.utc))
            return await rep.complete()
        finally:
            await store.close()

    view = asyncio.run(_run())
    assert view.today == DailyCounter(date(2024, 1, 1))
    assert view.yesterday == DailyCounter(date(2023, 12, 31))
    assert (view.last_week.file_count, view.last_week.total_size) == (0, 0)
    assert (view.total.file_count, view.total.total_size) == (0, 0)
    assert view.as_dict()["last_week"]["start_date"] == "2023-12-25"


def test_today_idempotent(tmp_path):
    async def _run():
        store = await StatsStore.open(tmp_path / "stats.db")
        try:
            clock = lambda: datetime(2024, 2, 2, 8, tzinfo=timezone.utc)  # noqa: E731
            await StatsAggregator(store, clock=clock).record_event(42)
            rep = StatsReporter(store, clock=clock)
            return await rep.today(), await rep.today()
        finally:
            await store.close()

    first, second = asyncio.run(_run())
    assert first == second == DailyCounter(date(2024, 2, 2), 1, 42)


def test_complete_degrades_failed_sub_queries(tmp_path):
    async def _run():
        store = await StatsStore.open(tmp_path / "stats.db")
        try:
            clock = lambda: datetime(2024, 2, 2, 8, tzinfo=timezone.utc)  # noqa: E731
            await StatsAggregator(store, clock=clock).record_event(42)
            rep = StatsReporter(store, clock=clock)

            async def boom():
                raise RuntimeError("store unavailable")

            rep.total = boom  # one metric fails, the rest still report
            return await rep.complete()
        finally:
            await store.close()

    view = asyncio.run(_run())
    assert view.today.file_count == 1 and view.today.total_size == 42
    assert (view.total.file_count, view.total.total_size) == (0, 0)


def test_complete_on_closed_store_never_raises(tmp_path):
    async def _run():
        store = await StatsStore.open(tmp_path / "stats.db")
        rep = StatsReporter(store, clock=lambda: datetime(2024, 2, 2, tzinfo=timezone.utc))
        await store.close()
        return await rep.complete()

    view = asyncio.run(_run())
    assert view.today == DailyCounter(date(2024, 2, 2))
    assert view.total.file_count == 0
