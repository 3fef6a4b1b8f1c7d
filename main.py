from __future__ import annotations

import asyncio
import signal
from telethon import TelegramClient

import config
from logger import log
from handlers import BotContext, register_bot_commands, register_handlers
from links import LinkIssuer
from stats import StatsAggregator, StatsReporter, StatsStore


def main() -> None:
    asyncio.run(_main())


async def _main():
    config.validate()
    store = await StatsStore.open(config.STATS_DB_PATH)
    ctx = build_context(store)
    client = await _setup_client(ctx)
    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    async def shutdown():
        await _graceful_shutdown(client, ctx, shutdown_event)

    _install_signal_handlers(loop, shutdown)
    try:
        await client.run_until_disconnected()
    finally:
        if not shutdown_event.is_set():
            await shutdown()
        await store.close()


def build_context(store: StatsStore) -> BotContext:
    return BotContext(
        issuer=LinkIssuer(config.WORKER_URL, config.HASH_LENGTH),
        aggregator=StatsAggregator(store),
        reporter=StatsReporter(store),
        store=store,
        log_channel=config.LOG_CHANNEL,
    )


async def _setup_client(ctx: BotContext) -> TelegramClient:
    client = TelegramClient(config.SESSION_NAME, config.API_ID, config.API_HASH)
    register_handlers(client, ctx)
    await client.start(bot_token=config.BOT_TOKEN)
    await register_bot_commands(client)
    log.info("Bot running – send a file in a private chat to get a stream link (hash length %d).", config.HASH_LENGTH)
    return client


async def _graceful_shutdown(client, ctx: BotContext, shutdown_event: asyncio.Event):
    if shutdown_event.is_set():
        return
    log.info("Shutting down gracefully...")
    shutdown_event.set()
    if ctx.pending():
        log.info("Waiting for %d pending stats write(s)", ctx.pending())
    await ctx.drain()
    await client.disconnect()


def _install_signal_handlers(loop, shutdown_coro):
    def trigger():  # noqa: D401
        loop.create_task(shutdown_coro())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, trigger)
        except NotImplementedError:  # pragma: no cover
            signal.signal(sig, lambda *_: loop.create_task(shutdown_coro()))


if __name__ == "__main__":  # pragma: no cover
    main()
