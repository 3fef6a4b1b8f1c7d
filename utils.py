"""Utility helpers (size formatting, media filtering, reply text)."""
from __future__ import annotations

import math
from telethon.tl.types import MessageMediaDocument, MessageMediaPhoto

__all__ = [
    "humanize_size",
    "is_supported_media",
    "file_type_emoji",
    "to_italic",
    "split_messages",
]


def humanize_size(size_bytes: float) -> str:
    """Return human readable size (caps at TB to avoid index errors)."""
    if size_bytes <= 0:
        return "0B"
    names = ("B", "KB", "MB", "GB", "TB")
    i = int(math.log(size_bytes, 1024))
    if i >= len(names):
        i = len(names) - 1
    p = 1024 ** i
    return f"{round(size_bytes / p, 2)} {names[i]}"


def is_supported_media(message) -> bool:
    """Photos, plus documents typed ``video/*`` or ``application/*``.

    Only real photo or document media count: a web page preview carries a
    photo too but is not a file. Stickers, voice notes and the like are
    rejected.
    """
    media = getattr(message, "media", None)
    if isinstance(media, MessageMediaPhoto):
        return media.photo is not None
    if not isinstance(media, MessageMediaDocument):
        return False
    document = media.document
    mime_type = (getattr(document, "mime_type", "") or "").lower()
    return mime_type.startswith(("video/", "application/"))


_EMOJI_RULES = (
    (("video",), "🎬"),
    (("image",), "🖼️"),
    (("audio",), "🎵"),
    (("pdf",), "📕"),
    (("zip", "rar"), "🗜️"),
    (("text",), "📝"),
    (("application/x-msdos-program", "application/octet-stream"), "💻"),
)


def file_type_emoji(mime_type: str) -> str:
    lower = (mime_type or "").lower()
    for needles, emoji in _EMOJI_RULES:
        if any(n in lower for n in needles):
            return emoji
    return "📄"


def to_italic(text: str) -> str:
    """Map ASCII letters/digits to Unicode mathematical italic (digits: bold)."""
    out = []
    for ch in text:
        if "A" <= ch <= "Z":
            out.append(chr(0x1D434 + ord(ch) - ord("A")))
        elif "a" <= ch <= "z":
            # U+1D455 (italic h) is reserved; Planck constant stands in
            out.append("ℎ" if ch == "h" else chr(0x1D44E + ord(ch) - ord("a")))
        elif "0" <= ch <= "9":
            out.append(chr(0x1D7CE + ord(ch) - ord("0")))
        else:
            out.append(ch)
    return "".join(out)


def split_messages(lines: list[str], header: str, continued_header: str, limit: int = 4000) -> list[str]:
    """Pack ``lines`` into messages no longer than ``limit`` characters.

    The first chunk starts with ``header``, later ones with ``continued_header``.
    A single line longer than the limit still gets its own chunk.
    """
    chunks: list[str] = []
    current = header
    for line in lines:
        if len(current) + len(line) > limit and current not in (header, continued_header):
            chunks.append(current)
            current = continued_header
        current += line
    if current not in (header, continued_header):
        chunks.append(current)
    return chunks
