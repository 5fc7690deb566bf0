"""
Tests for twoam/commands/chime.py - ChimeCog message handling.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest

from twoam.commands import parser
from twoam.commands.parser import ClearMute


def _message(content, is_bot=False, guild=True):
    return SimpleNamespace(
        content=content,
        author=SimpleNamespace(bot=is_bot),
        guild=SimpleNamespace(id=123) if guild else None,
        channel=SimpleNamespace(send=AsyncMock()),
    )


class TestChimeCog:
    """Tests for the text command listener."""

    @pytest.fixture
    def handler(self):
        handler = Mock()
        handler.handle = AsyncMock(return_value=["Unmuted 2amInDiscord."])
        return handler

    @pytest.fixture
    def cog(self, handler):
        from twoam.commands.chime import ChimeCog

        return ChimeCog(Mock(), handler)

    @pytest.mark.asyncio
    async def test_prefixed_message_is_handled(self, cog, handler):
        message = _message("!2amInDiscord unmute")
        await cog.on_message(message)

        handler.handle.assert_awaited_once_with(ClearMute(), message.guild)
        message.channel.send.assert_awaited_once_with("Unmuted 2amInDiscord.")

    @pytest.mark.asyncio
    async def test_test_fire_announces_attempt(self, cog, handler):
        message = _message("!2amInDiscord test")
        await cog.on_message(message)

        handler.handle.assert_awaited_once_with(parser.TestFire(), message.guild)
        assert message.channel.send.await_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "message",
        [
            _message("hello there"),
            _message("!2amInDiscord unmute", is_bot=True),
            _message("!2amInDiscord unmute", guild=False),
        ],
    )
    async def test_ignored_messages(self, cog, handler, message):
        await cog.on_message(message)
        handler.handle.assert_not_awaited()
