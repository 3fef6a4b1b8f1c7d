from __future__ import annotations

import hashlib
from dataclasses import dataclass

from telethon.tl.types import MessageMediaDocument, MessageMediaPhoto

__all__ = ["FileMetadata"]


@dataclass(frozen=True, slots=True)
class FileMetadata:
    """Metadata of one forwarded media item.

    ``message_id`` is the id of the copy in the log channel (0 if unknown).
    It is what the link carries; the rest feeds the token.
    """

    file_id: int
    file_name: str
    file_size: int
    mime_type: str
    message_id: int = 0

    @classmethod
    def from_message(cls, message) -> "FileMetadata":
        """Build metadata from a Telethon message holding a document or photo."""
        raw = getattr(message, "media", None)
        if isinstance(raw, MessageMediaDocument):
            media = raw.document
        elif isinstance(raw, MessageMediaPhoto):
            media = raw.photo
        else:
            media = None
        if media is None:
            raise ValueError("message carries no document or photo")
        file = getattr(message, "file", None)
        return cls(
            file_id=int(media.id),
            file_name=(getattr(file, "name", None) or ""),
            file_size=int(getattr(file, "size", None) or 0),
            mime_type=(getattr(file, "mime_type", None) or ""),
            message_id=int(getattr(message, "id", 0) or 0),
        )

    @property
    def display_name(self) -> str:
        # Unnamed uploads (photos, some documents) get a stable placeholder
        if self.file_name:
            return self.file_name
        return hashlib.sha256(str(self.file_id).encode()).hexdigest()[:12] + "_file"
