"""Compose outward-facing stream links.

Canonical form: ``{base}/{message_id}/{token}``. The worker resolves the file
from the message id alone and uses the token only as a tamper check, so no
other metadata is placed in the URL.
"""
from __future__ import annotations

import re
from urllib.parse import urlsplit

from logger import log
from .fingerprint import DEFAULT_HASH_LENGTH, clamp_hash_length, file_token
from .metadata import FileMetadata

__all__ = ["LinkIssuer", "normalize_base_url"]

_BAD_SEGMENT = re.compile(r"[/?#%\s]")


def normalize_base_url(raw: str | None) -> str:
    """Validate a base URL and strip trailing slashes. Raises ValueError."""
    base = (raw or "").strip()
    if not base:
        raise ValueError("base URL is empty")
    parts = urlsplit(base)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValueError(f"base URL must be an absolute http(s) URL: {base!r}")
    if parts.query or parts.fragment:
        raise ValueError(f"base URL must not carry a query or fragment: {base!r}")
    return base.rstrip("/")


class LinkIssuer:
    def __init__(self, base_url: str, hash_length: int = DEFAULT_HASH_LENGTH):
        self.base_url = normalize_base_url(base_url)
        self.hash_length = clamp_hash_length(hash_length)

    def issue(self, message_id: int, token: str) -> str:
        if isinstance(message_id, bool) or not isinstance(message_id, int) or message_id < 0:
            raise ValueError(f"invalid message id: {message_id!r}")
        if not token or _BAD_SEGMENT.search(token):
            raise ValueError(f"invalid token for path segment: {token!r}")
        return f"{self.base_url}/{message_id}/{token}"

    def issue_for(self, meta: FileMetadata) -> str:
        token = file_token(meta, self.hash_length)
        url = self.issue(meta.message_id, token)
        log.debug("Issued link for message %s (token=%s)", meta.message_id, token)
        return url
