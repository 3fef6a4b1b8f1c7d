"""/broadcast: send a text to every user the bot has seen."""
from __future__ import annotations

import asyncio

from logger import log
from stats import StatsStore

__all__ = ["broadcast_text", "handle_broadcast", "remember_user"]

USAGE = "Please provide a message to broadcast. Usage: /broadcast <message>"


def broadcast_text(raw_text: str | None) -> str:
    parts = (raw_text or "").strip().split(maxsplit=1)
    return parts[1].strip() if len(parts) > 1 else ""


async def remember_user(store: StatsStore, user_id: int | None) -> None:
    if user_id is None:
        return
    try:
        if await store.add_user(user_id):
            log.debug("New user %s", user_id)
    except Exception as e:  # noqa: BLE001
        log.error("Failed to save user %s: %s", user_id, e)


async def handle_broadcast(client, event, store: StatsStore, delay: float = 0.05) -> tuple[int, int]:
    """Send the command's text to all known users; return (sent, failed)."""
    text = broadcast_text(event.raw_text)
    if not text:
        await event.respond(USAGE)
        return 0, 0
    try:
        users = await store.list_users()
    except Exception as e:  # noqa: BLE001
        log.error("Failed to fetch users: %s", e)
        await event.respond("Error fetching users from database.")
        return 0, 0
    if not users:
        await event.respond("No users found in the database for broadcast.")
        return 0, 0

    sent = failed = 0
    for user_id in users:
        try:
            await client.send_message(user_id, text)
            sent += 1
        except Exception as e:  # noqa: BLE001
            failed += 1
            log.warning("Broadcast to %s failed: %s", user_id, e)
        if delay:
            await asyncio.sleep(delay)
    log.info("Broadcast finished: %d sent, %d failed", sent, failed)
    await event.respond(
        f"Broadcast completed:\n- Sent to {sent} users\n- Failed for {failed} users"
    )
    return sent, failed
