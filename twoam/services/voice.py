"""
Voice service: occupancy lookups and chime playback on Discord.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

import discord

from twoam.errors import DeliveryError, NotFoundError
from twoam.models.decision import DestinationStatus

logger = logging.getLogger(__name__)


class VoiceService:
    """
    Discord-backed occupancy probe and delivery collaborator.

    Attributes:
        bot: Discord bot instance
        ffmpeg_path: Path to ffmpeg executable
        connect_timeout: Seconds to wait for a voice connection
        volume: Playback volume multiplier
    """

    def __init__(self, bot, ffmpeg_path: str = "ffmpeg", connect_timeout: float = 10.0, volume: float = 1.0):
        self.bot = bot
        self.ffmpeg_path = ffmpeg_path
        self.connect_timeout = connect_timeout
        self.volume = volume

    def _lookup(
        self, tenant_id: str, destination_id: str
    ) -> Tuple[Optional[discord.Guild], Optional[discord.VoiceChannel]]:
        """Find the guild and voice channel in the client cache."""
        try:
            guild = self.bot.get_guild(int(tenant_id))
        except (TypeError, ValueError):
            return None, None
        if guild is None:
            return None, None
        try:
            channel = guild.get_channel(int(destination_id))
        except (TypeError, ValueError):
            return guild, None
        if not isinstance(channel, discord.VoiceChannel):
            return guild, None
        return guild, channel

    @staticmethod
    def count_present_members(channel: discord.VoiceChannel) -> int:
        """Count non-bot members currently in a voice channel."""
        return len([m for m in channel.members if not m.bot])

    async def resolve_destination(self, tenant_id: str, destination_id: str) -> DestinationStatus:
        """Report whether the destination exists and how many people are in it."""
        guild, channel = self._lookup(tenant_id, destination_id)
        if guild is None:
            logger.info(f"[VoiceService] Server {tenant_id} does not exist")
            return DestinationStatus(exists=False, tenant_found=False)
        if channel is None:
            logger.info(f"[VoiceService] Channel {destination_id} does not exist on server {tenant_id}")
            return DestinationStatus(exists=False)
        present = self.count_present_members(channel)
        if present == 0:
            logger.info(f"[VoiceService] Channel {channel.id} does not have any members")
        return DestinationStatus(exists=True, present_member_count=present)

    async def _connect(self, guild: discord.Guild, channel: discord.VoiceChannel):
        """Join the channel, reusing the guild's voice client when there is one."""
        voice_client = guild.voice_client
        if voice_client and voice_client.is_connected():
            if voice_client.channel.id != channel.id:
                await voice_client.move_to(channel)
            return voice_client
        if voice_client:
            await voice_client.disconnect(force=True)
        return await channel.connect(timeout=self.connect_timeout)

    async def deliver(self, tenant_id: str, destination_id: str, media_ref: Union[str, Path]) -> None:
        """
        Join the destination, play the media to completion, then leave.

        Raises:
            NotFoundError: The server or channel no longer exists.
            DeliveryError: The media file is missing, or joining or
                playback failed.
        """
        media_path = os.path.abspath(str(media_ref))
        if not os.path.exists(media_path):
            raise DeliveryError(f"media not found: {media_path}")

        guild, channel = self._lookup(tenant_id, destination_id)
        if guild is None or channel is None:
            raise NotFoundError(f"channel {destination_id} on server {tenant_id} not found")

        logger.info(f"[VoiceService] Attempting to join channel {channel.id} on server {guild.id}")
        try:
            voice_client = await self._connect(guild, channel)
        except (discord.DiscordException, asyncio.TimeoutError) as e:
            raise DeliveryError(f"could not join channel {channel.id}: {e}") from e

        loop = asyncio.get_running_loop()
        finished = loop.create_future()

        def after_playing(error):
            def _resolve():
                if finished.done():
                    return
                if error:
                    finished.set_exception(DeliveryError(f"playback failed: {error}"))
                else:
                    finished.set_result(None)
            loop.call_soon_threadsafe(_resolve)

        try:
            audio_source = discord.FFmpegPCMAudio(media_path, executable=self.ffmpeg_path)
            audio_source = discord.PCMVolumeTransformer(audio_source, volume=self.volume)
            logger.info(f"[VoiceService] Playing {media_path} in channel {channel.id}")
            voice_client.play(audio_source, after=after_playing)
            await finished
        except discord.DiscordException as e:
            raise DeliveryError(f"playback failed: {e}") from e
        finally:
            if voice_client.is_playing():
                voice_client.stop()
            try:
                await voice_client.disconnect()
            except discord.DiscordException as e:
                logger.warning(f"[VoiceService] Error leaving channel {channel.id}: {e}")
