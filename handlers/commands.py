from __future__ import annotations

import utils
from stats import DailyCounter, RollupView
from .context import BotContext

__all__ = ["HELP_TEXT", "render_stats", "handle_start", "handle_stats"]

HELP_TEXT = (
    "Need a direct streamable link to a file? Send it my way!\n\n"
    "Commands:\n/start - this help\n/stats - usage statistics\n"
    "/series - collect links of the next files into one list\n"
    "/broadcast <message> - send a message to every user"
)


def _line(label: str, c: DailyCounter) -> str:
    return f"{label} ({c.day.isoformat()}): {c.file_count} file(s), {utils.humanize_size(c.total_size)}"


def render_stats(view: RollupView) -> str:
    week = view.last_week
    return "\n".join([
        "📊 Statistics",
        _line("Today", view.today),
        _line("Yesterday", view.yesterday),
        (
            f"Last 7 days ({week.start.isoformat()} – {week.end.isoformat()}): "
            f"{week.file_count} file(s), {utils.humanize_size(week.total_size)}"
        ),
        f"Total: {view.total.file_count} file(s), {utils.humanize_size(view.total.total_size)}",
    ])


async def handle_start(event) -> None:
    await event.respond(HELP_TEXT)


async def handle_stats(event, ctx: BotContext) -> None:
    view = await ctx.reporter.complete()
    await event.respond(render_stats(view))
