"""Project-wide logger with a hard size cap (default 200MB).

Environment variables:
  LOG_FILE     Path to log file (default: bot.log)
  LOG_LEVEL    Logging level (default: INFO)
  LOG_MAX_MB   Max size in megabytes before truncation (default: 200, min 1)

A single log file is kept. When a record would push it past the cap, the file
is truncated in place, a marker line is written, and logging continues.
Records are echoed to stderr as well.
"""
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional

__all__ = ["log", "get_logger", "TruncatingFileHandler"]

LOGGER_NAME = "file_link_bot"
_FMT = "%(asctime)s %(levelname).1s %(name)s:%(lineno)d | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class TruncatingFileHandler(logging.FileHandler):
    """File handler that empties the file instead of rotating it."""

    def __init__(self, filename: str, max_bytes: int, encoding: Optional[str] = "utf-8"):
        super().__init__(filename, mode="a", encoding=encoding, delay=True)
        self.max_bytes = max_bytes

    def _current_size(self) -> int:
        try:
            return os.path.getsize(self.baseFilename)
        except OSError:
            return 0

    def _reset(self, previous_size: int) -> None:
        if self.stream is not None:
            self.stream.close()
        self.stream = open(self.baseFilename, "w", encoding=self.encoding or "utf-8")
        stamp = datetime.now(timezone.utc).isoformat()
        self.stream.write(f"--- log truncated at {stamp} (previous size {previous_size} bytes) ---\n")

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record) + "\n"
            if self.stream is None:
                self.stream = self._open()
            self.stream.flush()
            size = self._current_size()
            if size + len(line.encode(self.encoding or "utf-8")) > self.max_bytes:
                self._reset(size)
            self.stream.write(line)
            self.stream.flush()
        except Exception:  # noqa: BLE001
            self.handleError(record)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def get_logger() -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:  # Already configured
        return logger

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    log_file = os.getenv("LOG_FILE", "bot.log")
    max_mb = max(_env_int("LOG_MAX_MB", 200), 1)

    formatter = logging.Formatter(_FMT, datefmt=_DATEFMT)
    file_handler = TruncatingFileHandler(log_file, max_bytes=max_mb * 1024 * 1024)
    file_handler.setFormatter(formatter)
    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)

    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.addHandler(stderr_handler)
    logger.propagate = False
    logger.debug("Logger initialized (file=%s, max_mb=%s, level=%s)", log_file, max_mb, level_name)
    return logger


log = get_logger()
