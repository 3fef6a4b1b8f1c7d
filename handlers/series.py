"""Series mode: collect every link issued to a user until they toggle it off."""
from __future__ import annotations

import utils
from logger import log

__all__ = ["SeriesSessions", "handle_series", "SERIES_HEADER", "SERIES_CONTINUED"]

SERIES_HEADER = "Processed series URLs:\n"
SERIES_CONTINUED = "Processed series URLs (continued):\n"
MAX_MESSAGE_LENGTH = 4000


class SeriesSessions:
    def __init__(self):
        self._urls: dict[int, list[str]] = {}

    def is_active(self, user_id: int) -> bool:
        return user_id in self._urls

    def toggle(self, user_id: int) -> list[str] | None:
        """Activate (returns None) or deactivate (returns collected URLs)."""
        if user_id in self._urls:
            return self._urls.pop(user_id)
        self._urls[user_id] = []
        return None

    def add(self, user_id: int, url: str) -> bool:
        urls = self._urls.get(user_id)
        if urls is None:
            return False
        urls.append(url)
        return True


def render_series(urls: list[str]) -> list[str]:
    lines = [f"{i}. {url}\n" for i, url in enumerate(urls, start=1)]
    return utils.split_messages(lines, SERIES_HEADER, SERIES_CONTINUED, MAX_MESSAGE_LENGTH)


async def handle_series(event, sessions: SeriesSessions) -> None:
    user_id = event.sender_id
    urls = sessions.toggle(user_id)
    if urls is None:
        await event.respond(
            "Series mode activated. Send files to process. Use /series again to get the list and deactivate."
        )
        return
    if not urls:
        await event.respond("No files were processed during this series mode.")
        return
    for chunk in render_series(urls):
        try:
            await event.respond(chunk)
        except Exception as e:  # noqa: BLE001
            log.error("Failed to send series URLs to %s: %s", user_id, e)
            await event.respond("Error sending series URLs.")
            return
