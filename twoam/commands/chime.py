"""
Chime commands: the "!2amInDiscord" text prefix and the /chime slash group.
"""

import discord
from discord.ext import commands
from discord.commands import Option, SlashCommandGroup

from twoam.commands.handler import CommandHandler
from twoam.commands.parser import ClearMute, SetDestination, SetMute, TestFire, parse_command
from twoam.config import COMMAND_PREFIX


class ChimeCog(commands.Cog):
    """Configure, mute and test the 2am chime."""

    chime = SlashCommandGroup(
        "chime",
        "2amInDiscord chime commands",
        default_member_permissions=discord.Permissions(manage_guild=True),
    )

    def __init__(self, bot: discord.Bot, handler: CommandHandler):
        self.bot = bot
        self.handler = handler

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        """Answer text commands addressed with the prefix."""
        if message.author.bot or not message.guild:
            return
        command = parse_command(message.content, COMMAND_PREFIX)
        if command is None:
            return
        if isinstance(command, TestFire):
            await message.channel.send(f"Attempting to play test sound on server {message.guild.id}...")
        replies = await self.handler.handle(command, message.guild)
        await message.channel.send("\n".join(replies))

    async def _respond(self, ctx: discord.ApplicationContext, command):
        if not ctx.guild:
            await ctx.respond("This command can only be used inside a server.", ephemeral=True)
            return
        await ctx.defer(ephemeral=True)
        replies = await self.handler.handle(command, ctx.guild)
        await ctx.respond("\n".join(replies), ephemeral=True)

    @chime.command(name="set", description="Set the voice channel the chime plays in")
    async def chime_set(
        self,
        ctx: discord.ApplicationContext,
        channel_name: Option(str, "Voice channel name", required=True),
    ):
        await self._respond(ctx, SetDestination(name=channel_name.strip()))

    @chime.command(name="test", description="Play the chime now")
    async def chime_test(self, ctx: discord.ApplicationContext):
        await self._respond(ctx, TestFire())

    @chime.command(name="mute", description="Mute the chime")
    async def chime_mute(
        self,
        ctx: discord.ApplicationContext,
        until: Option(str, "tomorrow, week or a date (YYYY-MM-DD)", required=False, default=""),
    ):
        await self._respond(ctx, SetMute(spec=until))

    @chime.command(name="unmute", description="Unmute the chime")
    async def chime_unmute(self, ctx: discord.ApplicationContext):
        await self._respond(ctx, ClearMute())


def setup(bot: discord.Bot, handler: CommandHandler = None):
    """Set up chime commands cog."""
    if handler is None:
        raise ValueError("handler parameter is required for ChimeCog")
    bot.add_cog(ChimeCog(bot, handler))
