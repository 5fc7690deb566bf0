"""
Tests for twoam/commands/parser.py - text command parsing.
"""

import pytest

from twoam.commands import parser
from twoam.commands.parser import ClearMute, SetDestination, SetMute, Unknown, parse_command


class TestParseCommand:
    """Tests for turning messages into commands."""

    @pytest.mark.parametrize(
        "content, expected",
        [
            ("!2amInDiscord set General", SetDestination(name="General")),
            ("!2amInDiscord set Late Night  Lounge", SetDestination(name="Late Night  Lounge")),
            ("!2amInDiscord SET General", SetDestination(name="General")),
            ("!2amInDiscord test", parser.TestFire()),
            ("  !2amInDiscord test  ", parser.TestFire()),
            ("!2amInDiscord mute", SetMute(spec="")),
            ("!2amInDiscord mute week", SetMute(spec="week")),
            ("!2amInDiscord mute 2030-02-14", SetMute(spec="2030-02-14")),
            ("!2amInDiscord unmute", ClearMute()),
            ("!2amInDiscord frequency 3", Unknown(text="frequency")),
            ("!2amInDiscord", Unknown(text="")),
        ],
    )
    def test_parses_commands(self, content, expected):
        assert parse_command(content) == expected

    @pytest.mark.parametrize("content", ["hello", "", None, "!2amInDiscordset General", "set General"])
    def test_ignores_messages_not_for_the_bot(self, content):
        assert parse_command(content) is None

    def test_custom_prefix(self):
        assert parse_command("!chime test", prefix="!chime") == parser.TestFire()
