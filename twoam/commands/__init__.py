"""
Discord command adapter for the 2amInDiscord bot.

Messages and slash commands are parsed into command objects and run by
the CommandHandler, which owns every user-facing reply.
"""

from twoam.commands.handler import CommandHandler
from twoam.commands.parser import (
    ClearMute,
    Command,
    SetDestination,
    SetMute,
    TestFire,
    Unknown,
    parse_command,
)

__all__ = [
    "CommandHandler",
    "ClearMute",
    "Command",
    "SetDestination",
    "SetMute",
    "TestFire",
    "Unknown",
    "parse_command",
]
