"""Media message -> log channel copy -> stream link reply."""
from __future__ import annotations

from telethon import Button

import utils
from links import FileMetadata
from logger import log
from .broadcast import remember_user
from .context import BotContext

__all__ = ["handle_file", "build_caption"]

UNSUPPORTED = "Sorry, this message type is unsupported."


def build_caption(meta: FileMetadata) -> str:
    emoji = utils.file_type_emoji(meta.mime_type)
    return (
        f"{emoji} Name: {utils.to_italic(meta.display_name)}\n"
        f"{emoji} Type: {utils.to_italic(meta.mime_type or 'unknown')}\n"
        f"{emoji} Size: {utils.to_italic(utils.humanize_size(meta.file_size))}"
    )


async def handle_file(client, event, ctx: BotContext) -> str | None:
    """Issue a stream link for the media in ``event``; return the URL.

    Stats are recorded in a background task so a store failure never
    delays or blocks the reply.
    """
    ctx.spawn(remember_user(ctx.store, getattr(event, "sender_id", None)))
    message = event.message
    if not utils.is_supported_media(message):
        await event.respond(UNSUPPORTED, reply_to=getattr(event, "id", None))
        return None
    try:
        forwarded = await client.forward_messages(ctx.log_channel, message)
    except Exception as e:  # noqa: BLE001
        log.error("Failed to forward message from chat %s: %s", getattr(event, "chat_id", None), e)
        await event.respond(f"Error forwarding message: {e}")
        return None
    try:
        meta = FileMetadata.from_message(forwarded)
    except ValueError as e:
        log.error("Failed to extract file from forwarded message: %s", e)
        await event.respond(f"Error extracting file: {e}")
        return None

    url = ctx.issuer.issue_for(meta)
    ctx.spawn(ctx.aggregator.record_event(meta.file_size))

    try:
        await event.respond(
            build_caption(meta),
            buttons=[[Button.url("Streaming / Download", url)]],
            reply_to=getattr(event, "id", None),
        )
    except Exception as e:  # noqa: BLE001
        log.error("Failed to send link reply: %s", e)
    if ctx.series.add(event.sender_id, url):
        log.debug("Series link collected for %s", event.sender_id)
    log.info("Link issued for %s (%s)", meta.display_name, utils.humanize_size(meta.file_size))
    return url
