import asyncio

import pytest

import config
import main
from handlers import _command, command_name


class _Ev:
    def __init__(self, raw_text, is_private=True):
        self.raw_text = raw_text
        self.is_private = is_private


@pytest.mark.parametrize(
    "text,expected",
    [
        ("/start", "start"),
        ("/start ref_123", "start"),
        ("/START@MyLinkBot", "start"),
        ("/broadcast hello there", "broadcast"),
        ("hello /start", None),
        ("", None),
        (None, None),
    ],
)
def test_command_name(text, expected):
    assert command_name(text) == expected


def test_deep_link_start_matches():
    assert _command("start")(_Ev("/start payload"))
    assert not _command("start")(_Ev("/starter"))
    assert not _command("start")(_Ev("/start", is_private=False))


class FakeClient:
    def __init__(self, *args, **kwargs):
        self.calls = []

    def on(self, _event):
        return lambda fn: fn

    async def start(self, bot_token=None):
        self.calls.append("start")

    async def __call__(self, request):
        self.calls.append(type(request).__name__)


def test_bot_commands_set_after_start(monkeypatch):
    monkeypatch.setattr(main, "TelegramClient", FakeClient)
    monkeypatch.setattr(config, "BOT_TOKEN", "tok")
    client = asyncio.run(main._setup_client(object()))
    assert client.calls == ["start", "SetBotCommandsRequest"]
