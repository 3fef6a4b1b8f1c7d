from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable

from links import LinkIssuer
from stats import StatsAggregator, StatsReporter, StatsStore
from .series import SeriesSessions


@dataclass(slots=True)
class BotContext:
    """Collaborators shared by all handlers, built once in main."""

    issuer: LinkIssuer
    aggregator: StatsAggregator
    reporter: StatsReporter
    store: StatsStore  # users table for /broadcast
    log_channel: int
    series: SeriesSessions = field(default_factory=SeriesSessions)
    # Strong refs so fire-and-forget tasks are not garbage collected mid-flight
    _tasks: set[asyncio.Task] = field(default_factory=set)

    def spawn(self, coro: Awaitable) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: float = 5.0) -> None:
        if not self._tasks:
            return
        try:
            await asyncio.wait_for(
                asyncio.gather(*tuple(self._tasks), return_exceptions=True), timeout=timeout
            )
        except asyncio.TimeoutError:
            for t in tuple(self._tasks):
                t.cancel()


__all__ = ["BotContext"]
