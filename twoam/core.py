"""
Core Bot class - Main Discord bot instance.

This module provides the Bot class which extends commands.Bot
with additional attributes for bot configuration.
"""

import logging

import discord
from discord.ext import commands

logger = logging.getLogger(__name__)


class Bot(commands.Bot):
    """
    Main Discord bot class with custom attributes.

    Attributes:
        token: Discord bot token for authentication.
        ffmpeg_path: Path to FFmpeg executable for audio processing.
    """

    def __init__(self, command_prefix: str, intents: discord.Intents,
                 token: str, ffmpeg_path: str):
        """
        Initialize the bot.

        Args:
            command_prefix: Prefix for text commands.
            intents: Discord intents configuration.
            token: Bot authentication token.
            ffmpeg_path: Path to FFmpeg executable.
        """
        super().__init__(command_prefix=command_prefix, intents=intents)
        self.token = token
        self.ffmpeg_path = ffmpeg_path

    async def on_ready(self):
        logger.info(f"Logged in as {self.user}!")
        # The bot only shows up when it joins to chime
        await self.change_presence(status=discord.Status.invisible)

    async def on_error(self, event_method: str, *args, **kwargs):
        logger.exception(f"Unhandled error in {event_method}")

    def run_bot(self) -> None:
        """Start the bot using the configured token."""
        self.run(self.token)
