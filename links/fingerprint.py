"""Deterministic short tokens for forwarded files.

The token is a tamper check, not a credential: the link worker re-reads the
file metadata from the log channel message and recomputes the same token.
Both sides must therefore agree on the exact canonical encoding below.
"""
from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .metadata import FileMetadata

__all__ = [
    "DEFAULT_HASH_LENGTH",
    "MIN_HASH_LENGTH",
    "MAX_HASH_LENGTH",
    "canonical_string",
    "clamp_hash_length",
    "digest",
    "short_token",
    "file_token",
]

DEFAULT_HASH_LENGTH = 6
MIN_HASH_LENGTH = 5
MAX_HASH_LENGTH = 32


def _segment(value) -> str:
    text = "" if value is None else str(value)
    return f"{len(text.encode('utf-8'))}:{text},"


def canonical_string(file_name: str | None, file_size: int | None, mime_type: str | None, file_id: int | None) -> str:
    """Encode the metadata tuple as netstring-style length-prefixed segments.

    Order is fixed (name, size, mime, id). Lengths are UTF-8 byte counts so a
    ``,`` or ``:`` inside a name can never move a field boundary.
    """
    return "".join(_segment(v) for v in (file_name, file_size, mime_type, file_id))


def clamp_hash_length(length) -> int:
    """Return ``length`` if it lies in [5, 32], else the default (6)."""
    if isinstance(length, bool) or not isinstance(length, int):
        return DEFAULT_HASH_LENGTH
    if MIN_HASH_LENGTH <= length <= MAX_HASH_LENGTH:
        return length
    return DEFAULT_HASH_LENGTH


def digest(canonical: str) -> bytes:
    return hashlib.sha256(canonical.encode("utf-8")).digest()


def short_token(raw_digest: bytes, length: int = DEFAULT_HASH_LENGTH) -> str:
    return raw_digest.hex()[: clamp_hash_length(length)]


def file_token(meta: "FileMetadata", length: int = DEFAULT_HASH_LENGTH) -> str:
    canonical = canonical_string(meta.file_name, meta.file_size, meta.mime_type, meta.file_id)
    return short_token(digest(canonical), length)
