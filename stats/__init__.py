"""Per-day usage counters: store, aggregator (writes) and reporter (reads)."""

from .store import StatsStore, StatsStoreError  # noqa: F401
from .aggregator import StatsAggregator  # noqa: F401
from .reporter import StatsReporter  # noqa: F401
from .types import DailyCounter, WeeklyCounter, RollupView, utc_now, utc_today  # noqa: F401
