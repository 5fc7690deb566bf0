"""
Executes parsed commands against the tenant and dispatcher services and
composes the text replies.
"""

import logging
from datetime import datetime
from typing import List, Optional

import discord

from twoam.commands.parser import ClearMute, Command, SetDestination, SetMute, TestFire
from twoam.config import COMMAND_PREFIX
from twoam.errors import ConfigurationError, InvalidMuteSpecError, RepositoryError
from twoam.models.decision import SingleResult, TickStatus
from twoam.services.eligibility import (
    REASON_DESTINATION_EMPTY,
    REASON_DESTINATION_MISSING,
    REASON_NOT_CONFIGURED,
    REASON_SERVER_MISSING,
)

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Available commands:\n\n"
    f"{COMMAND_PREFIX} set <voice channel name>\n"
    f"{COMMAND_PREFIX} test\n"
    f"{COMMAND_PREFIX} mute <tomorrow/week/specific date (format: YYYY-MM-DD)>\n"
    f"{COMMAND_PREFIX} unmute"
)
NOT_CONFIGURED_TEXT = f"You must set a voice channel first ({COMMAND_PREFIX} set <voice channel name>)"
STORAGE_ERROR_TEXT = "Oh no! Something went wrong while saving your settings"


def find_voice_channel(guild: discord.Guild, name: str) -> Optional[discord.VoiceChannel]:
    """Find a voice channel in the guild by exact name."""
    for channel in guild.voice_channels:
        if channel.name == name:
            return channel
    return None


class CommandHandler:
    """
    Runs one command for one guild.

    Every outcome, including configuration mistakes and suppressed test
    fires, produces a reply so users can see why nothing played.
    """

    def __init__(self, tenant_service, dispatcher):
        self.tenant_service = tenant_service
        self.dispatcher = dispatcher

    async def handle(self, command: Command, guild: discord.Guild, now: Optional[datetime] = None) -> List[str]:
        """
        Execute a command.

        Args:
            command: Parsed command.
            guild: Guild the command came from.
            now: Reference time, defaults to the current time.

        Returns:
            Reply lines to send back to the channel.
        """
        now = now or datetime.now()
        try:
            if isinstance(command, SetDestination):
                return self._set_destination(guild, command.name)
            if isinstance(command, TestFire):
                result = await self.dispatcher.run_single(str(guild.id), now)
                return describe_single_result(result)
            if isinstance(command, SetMute):
                return self._set_mute(guild, command.spec, now)
            if isinstance(command, ClearMute):
                self.tenant_service.clear_mute(guild.id)
                return ["Unmuted 2amInDiscord."]
        except ConfigurationError:
            return [NOT_CONFIGURED_TEXT]
        except RepositoryError as e:
            logger.error(f"[CommandHandler] Storage error for server {guild.id}: {e}")
            return [STORAGE_ERROR_TEXT]
        return [HELP_TEXT]

    def _set_destination(self, guild: discord.Guild, name: str) -> List[str]:
        channel = find_voice_channel(guild, name) if name else None
        if channel is None:
            return [f"Could not find voice channel '{name}'"]
        self.tenant_service.set_destination(guild.id, channel.id)
        return [f"Set '{channel.name}' as 2amInDiscord voice channel"]

    def _set_mute(self, guild: discord.Guild, spec: str, now: datetime) -> List[str]:
        try:
            until = self.tenant_service.set_mute(guild.id, spec, now)
        except InvalidMuteSpecError as e:
            return [str(e)]
        return [
            f"Muting 2amInDiscord until {until:%A, %B %d %Y, %H:%M:%S}. "
            f"Use \"{COMMAND_PREFIX} unmute\" to unmute sooner."
        ]


def describe_single_result(result: SingleResult) -> List[str]:
    """Explain a test fire outcome in plain words."""
    channel = f"<#{result.destination_id}>" if result.destination_id else "your voice channel"

    if result.status == TickStatus.FIRED:
        return [f"Played the test chime in {channel}."]

    if result.status == TickStatus.DEFERRED:
        if result.reason == REASON_DESTINATION_EMPTY:
            return [f"Nobody is in {channel}, so the chime was not played."]
        if result.mute_until is not None:
            return [
                f"Server {result.tenant_id} is muted until {result.mute_until:%Y-%m-%d %H:%M:%S}. "
                f"Use \"{COMMAND_PREFIX} unmute\" to unmute."
            ]
        return [f"The chime was deferred: {result.reason}."]

    if result.status == TickStatus.SKIPPED:
        if result.reason == REASON_NOT_CONFIGURED:
            return [NOT_CONFIGURED_TEXT]
        if result.reason == REASON_SERVER_MISSING:
            return ["Could not find your server, please kick and re-invite the 2amInDiscord bot."]
        if result.reason == REASON_DESTINATION_MISSING:
            return [f"Your voice channel no longer exists, pick a new one with {COMMAND_PREFIX} set <voice channel name>"]
        return [f"The chime was skipped: {result.reason}."]

    return [f"Oh no! The test chime failed: {result.reason}"]
