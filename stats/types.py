from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone

__all__ = ["DailyCounter", "WeeklyCounter", "RollupView", "utc_now", "utc_today"]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today(clock=utc_now) -> date:
    """UTC calendar day for ``clock()``; naive datetimes are taken as UTC."""
    now = clock()
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


@dataclass(frozen=True, slots=True)
class DailyCounter:
    day: date
    file_count: int = 0
    total_size: int = 0


@dataclass(frozen=True, slots=True)
class WeeklyCounter:
    start: date  # inclusive
    end: date  # exclusive
    file_count: int = 0
    total_size: int = 0


@dataclass(frozen=True, slots=True)
class RollupView:
    today: DailyCounter
    yesterday: DailyCounter
    last_week: WeeklyCounter
    total: DailyCounter

    def as_dict(self) -> dict:
        def _day(c: DailyCounter) -> dict:
            return {"date": c.day.isoformat(), "file_count": c.file_count, "total_size": c.total_size}

        return {
            "today": _day(self.today),
            "yesterday": _day(self.yesterday),
            "last_week": {
                "start_date": self.last_week.start.isoformat(),
                "end_date": self.last_week.end.isoformat(),
                "file_count": self.last_week.file_count,
                "total_size": self.last_week.total_size,
            },
            "total": _day(self.total),
        }
