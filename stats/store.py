"""SQLite-backed table of per-day counters.

One ``daily_stats`` row per UTC calendar day (ISO ``YYYY-MM-DD`` text key, so
range filters compare lexicographically). The store owns a single aiosqlite
connection; statements run one at a time on its worker thread. The only
counter write is :meth:`StatsStore.increment`, a single upsert statement, so
concurrent callers cannot lose increments. Each write runs as its own
transaction under a lock, so a failed write rolls back only itself.

The same database keeps the ``users`` table (every user who sent the bot a
message), read by the broadcast command.
"""
from __future__ import annotations

import asyncio
from datetime import date, datetime, timezone
from pathlib import Path

import aiosqlite

from logger import log

__all__ = ["StatsStore", "StatsStoreError"]

SCHEMA = """
CREATE TABLE IF NOT EXISTS daily_stats (
    date        TEXT    PRIMARY KEY,
    file_count  INTEGER NOT NULL DEFAULT 0,
    total_size  INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE IF NOT EXISTS users (
    user_id     INTEGER PRIMARY KEY,
    first_seen  TEXT    NOT NULL
);
"""

_UPSERT = """
INSERT INTO daily_stats (date, file_count, total_size)
VALUES (?, 1, ?)
ON CONFLICT(date) DO UPDATE SET
    file_count = file_count + 1,
    total_size = total_size + excluded.total_size
"""


class StatsStoreError(RuntimeError):
    """Store used while not open."""


class StatsStore:
    def __init__(self, path: str | Path):
        self.path = str(path)
        self._db: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()

    @classmethod
    async def open(cls, path: str | Path) -> "StatsStore":
        store = cls(path)
        await store.connect()
        return store

    @property
    def is_open(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        if self._db is not None:
            return
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        db = await aiosqlite.connect(self.path)
        await db.executescript(SCHEMA)
        await db.commit()
        self._db = db
        log.info("Stats store ready (%s)", self.path)

    async def close(self) -> None:
        if self._db is None:
            return
        db, self._db = self._db, None
        await db.close()
        log.debug("Stats store closed")

    def _conn(self) -> aiosqlite.Connection:
        if self._db is None:
            raise StatsStoreError("stats store is not open")
        return self._db

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def _write(self, sql: str, params) -> int:
        db = self._conn()
        async with self._write_lock:
            try:
                cursor = await db.execute(sql, params)
                changed = cursor.rowcount
                await cursor.close()
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        return changed

    async def increment(self, day: date, size_bytes: int) -> None:
        """Insert ``(day, 1, size)`` or add ``(1, size)`` to the existing row."""
        await self._write(_UPSERT, (day.isoformat(), size_bytes))

    async def add_user(self, user_id: int) -> bool:
        """Remember ``user_id``; True if it was not known before."""
        changed = await self._write(
            "INSERT OR IGNORE INTO users (user_id, first_seen) VALUES (?, ?)",
            (user_id, datetime.now(timezone.utc).isoformat()),
        )
        return changed > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_day(self, day: date) -> tuple[int, int] | None:
        db = self._conn()
        cursor = await db.execute(
            "SELECT file_count, total_size FROM daily_stats WHERE date = ?", (day.isoformat(),)
        )
        row = await cursor.fetchone()
        await cursor.close()
        return (row[0], row[1]) if row else None

    async def list_users(self) -> list[int]:
        db = self._conn()
        cursor = await db.execute("SELECT user_id FROM users ORDER BY first_seen, user_id")
        rows = await cursor.fetchall()
        await cursor.close()
        return [r[0] for r in rows]

    async def sum_range(self, start: date | None = None, end: date | None = None) -> tuple[int, int]:
        """Sum counters over ``[start, end)``; open bounds when None."""
        clauses: list[str] = []
        params: list[str] = []
        if start is not None:
            clauses.append("date >= ?")
            params.append(start.isoformat())
        if end is not None:
            clauses.append("date < ?")
            params.append(end.isoformat())
        sql = "SELECT COALESCE(SUM(file_count), 0), COALESCE(SUM(total_size), 0) FROM daily_stats"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        db = self._conn()
        cursor = await db.execute(sql, params)
        row = await cursor.fetchone()
        await cursor.close()
        return int(row[0]), int(row[1])
