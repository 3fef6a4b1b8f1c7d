"""Telegram handler wiring.

Handlers are registered from an explicit list so the set of commands is
visible in one place.
"""
from __future__ import annotations

from telethon import events, TelegramClient

from logger import log
from .broadcast import handle_broadcast
from .commands import handle_start, handle_stats
from .context import BotContext
from .series import handle_series
from .stream import handle_file

__all__ = ["register_handlers", "register_bot_commands", "BotContext", "HANDLERS"]


def command_name(raw_text: str | None) -> str | None:
    """``"/start@MyBot payload"`` -> ``"start"``; None for non-commands."""
    words = (raw_text or "").strip().split(maxsplit=1)
    if not words or not words[0].startswith("/"):
        return None
    return words[0][1:].split("@", 1)[0].lower()


def _command(name: str):
    def _match(e) -> bool:
        return e.is_private and command_name(e.raw_text) == name

    return _match


def _not_command(e) -> bool:
    return e.is_private and not (e.raw_text or "").startswith("/")


def _register_stream(client: TelegramClient, ctx: BotContext):
    @client.on(events.NewMessage(func=_not_command))
    async def _stream(event):  # noqa: D401
        await handle_file(client, event, ctx)


def _register_start(client: TelegramClient, ctx: BotContext):
    @client.on(events.NewMessage(func=_command("start")))
    async def _start(event):  # noqa: D401
        await handle_start(event)


def _register_stats(client: TelegramClient, ctx: BotContext):
    @client.on(events.NewMessage(func=_command("stats")))
    async def _stats(event):  # noqa: D401
        await handle_stats(event, ctx)


def _register_series(client: TelegramClient, ctx: BotContext):
    @client.on(events.NewMessage(func=_command("series")))
    async def _series(event):  # noqa: D401
        await handle_series(event, ctx.series)


def _register_broadcast(client: TelegramClient, ctx: BotContext):
    @client.on(events.NewMessage(func=_command("broadcast")))
    async def _broadcast(event):  # noqa: D401
        await handle_broadcast(client, event, ctx.store)


HANDLERS = (
    ("stream", _register_stream),
    ("start", _register_start),
    ("stats", _register_stats),
    ("series", _register_series),
    ("broadcast", _register_broadcast),
)


def register_handlers(client: TelegramClient, ctx: BotContext) -> None:
    for name, register in HANDLERS:
        register(client, ctx)
        log.debug("Registered %s handler", name)
    log.info("All command handlers have been initialized")


async def register_bot_commands(client: TelegramClient) -> None:
    """Publish the command menu; needs an authorized client."""
    try:
        from telethon.tl.functions.bots import SetBotCommandsRequest
        from telethon.tl.types import BotCommand, BotCommandScopeDefault
    except Exception:  # noqa: BLE001
        return
    commands = [
        BotCommand("start", "Help / usage"),
        BotCommand("stats", "Usage statistics"),
        BotCommand("series", "Toggle series mode"),
        BotCommand("broadcast", "Send a message to all users"),
    ]
    try:
        await client(SetBotCommandsRequest(scope=BotCommandScopeDefault(), lang_code="", commands=commands))
    except Exception as e:  # noqa: BLE001
        log.warning("Setting bot commands failed: %s", e)
