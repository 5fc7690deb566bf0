"""
Wires the bot, storage, services and commands together.
"""

import logging

import discord

from twoam import config
from twoam.commands import chime
from twoam.commands.handler import CommandHandler
from twoam.core import Bot
from twoam.database import Database
from twoam.environment import Environment
from twoam.logger import setup_logging
from twoam.repositories.tenant import TenantRepository
from twoam.services.dispatcher import NotificationDispatcher
from twoam.services.scheduler import SchedulerService
from twoam.services.tenant import TenantService
from twoam.services.voice import VoiceService

logger = logging.getLogger(__name__)


def create_bot(env: Environment) -> Bot:
    """Build a ready-to-run bot from the environment."""
    intents = discord.Intents(guilds=True, voice_states=True, messages=True, message_content=True)
    bot = Bot(command_prefix=config.COMMAND_PREFIX, intents=intents, token=env.bot_token, ffmpeg_path=env.ffmpeg_path)

    Database(env.database_path)
    repo = TenantRepository()
    voice = VoiceService(bot, env.ffmpeg_path)
    dispatcher = NotificationDispatcher(
        repo=repo,
        probe=voice,
        delivery=voice,
        media_ref=config.CHIME_MEDIA,
        delivery_timeout=env.delivery_timeout,
        prune_stale=env.prune_stale_tenants,
    )

    handler = CommandHandler(TenantService(repo), dispatcher)
    chime.setup(bot, handler=handler)

    scheduler = SchedulerService(bot, dispatcher)
    scheduler.start_tasks()
    bot.scheduler = scheduler
    return bot


def run_bot():
    setup_logging()
    env = Environment()
    if not env.bot_token:
        logger.error("Please provide a DISCORD_BOT_TOKEN inside the .env file")
        return
    create_bot(env).run_bot()


def init_db():
    setup_logging()
    env = Environment()
    Database(env.database_path).close()
    logger.info(f"Database ready at {env.database_path}")
