"""Runtime configuration.

Reads environment variables once (via python-dotenv unless SKIP_DOTENV=1; the
.env file is looked up from the working directory) and exposes constants for
the rest of the code. Keep this lean: only parsing + validation.
Required: TELEGRAM_API_ID, TELEGRAM_API_HASH, TELEGRAM_BOT_TOKEN, LOG_CHANNEL,
WORKER_URL.
"""
from __future__ import annotations

import os
from dotenv import find_dotenv, load_dotenv

# Must run before anything imports logger, which reads LOG_* at import time.
if os.getenv("SKIP_DOTENV") != "1":
    load_dotenv(find_dotenv(usecwd=True))

from links.fingerprint import clamp_hash_length  # noqa: E402
from links.issuer import normalize_base_url  # noqa: E402


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


API_ID: int = _env_int("TELEGRAM_API_ID", 0)
API_HASH: str = os.getenv("TELEGRAM_API_HASH", "")
BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
SESSION_NAME: str = os.getenv("SESSION_NAME", "bot")

# Channel every incoming file is forwarded to; its message ids go into links.
LOG_CHANNEL: int = _env_int("LOG_CHANNEL", 0)

# Base of the link-resolving worker, e.g. https://files.example.workers.dev
WORKER_URL: str = os.getenv("WORKER_URL", "").strip()

# Out-of-range values fall back to 6 (see links.fingerprint).
HASH_LENGTH: int = clamp_hash_length(_env_int("HASH_LENGTH", 6))

STATS_DB_PATH: str = os.path.expanduser(os.getenv("STATS_DB_PATH", "stats.db"))


def validate() -> None:
    if API_ID == 0 or not API_HASH or not BOT_TOKEN:
        raise SystemExit(
            "Missing TELEGRAM_API_ID / TELEGRAM_API_HASH / TELEGRAM_BOT_TOKEN"
        )
    if LOG_CHANNEL == 0:
        raise SystemExit("Missing LOG_CHANNEL")
    try:
        normalize_base_url(WORKER_URL)
    except ValueError as e:
        raise SystemExit(f"Invalid WORKER_URL: {e}")


__all__ = [
    "API_ID",
    "API_HASH",
    "BOT_TOKEN",
    "SESSION_NAME",
    "LOG_CHANNEL",
    "WORKER_URL",
    "HASH_LENGTH",
    "STATS_DB_PATH",
    "validate",
]
