"""
Text command parsing.

Turns "!2amInDiscord <verb> [args]" messages into one of a closed set of
command objects. Nothing outside this module looks at raw command text.
"""

from dataclasses import dataclass
from typing import Optional, Union

from twoam.config import COMMAND_PREFIX


@dataclass(frozen=True)
class SetDestination:
    """Use the named voice channel as the chime destination."""

    name: str


@dataclass(frozen=True)
class TestFire:
    """Play the chime now, reporting why if it can't."""


@dataclass(frozen=True)
class SetMute:
    """Mute until the end of today, a week, or a given date."""

    spec: str = ""


@dataclass(frozen=True)
class ClearMute:
    """Remove the mute window."""


@dataclass(frozen=True)
class Unknown:
    """Anything else addressed to the bot; answered with help."""

    text: str = ""


Command = Union[SetDestination, TestFire, SetMute, ClearMute, Unknown]


def parse_command(content: str, prefix: str = COMMAND_PREFIX) -> Optional[Command]:
    """
    Parse a chat message.

    Args:
        content: Raw message text.
        prefix: Command prefix the bot answers to.

    Returns:
        The command, or None if the message is not addressed to the bot.
    """
    text = (content or "").strip()
    if not text.startswith(prefix):
        return None
    rest = text[len(prefix):]
    if rest and not rest[0].isspace():
        return None

    verb, _, args = rest.strip().partition(" ")
    verb = verb.lower()
    args = args.strip()

    if verb == "set":
        return SetDestination(name=args)
    if verb == "test":
        return TestFire()
    if verb == "mute":
        return SetMute(spec=args)
    if verb == "unmute":
        return ClearMute()
    return Unknown(text=verb)
