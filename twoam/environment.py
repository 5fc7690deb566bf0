"""
Environment configuration loader.

This module loads environment variables from .env file
for bot configuration.
"""

import os
from dotenv import load_dotenv

from twoam import config


class Environment:
    """
    Environment configuration container.

    Attributes:
        bot_token: Discord bot authentication token.
        ffmpeg_path: Path to FFmpeg executable.
        database_path: SQLite file holding tenant records.
        prune_stale_tenants: Delete tenants whose server or channel vanished.
        delivery_timeout: Seconds allowed for one chime delivery.
    """

    def __init__(self):
        """Load environment variables from .env file."""
        load_dotenv()
        self.bot_token: str = os.getenv('DISCORD_BOT_TOKEN', '')
        self.ffmpeg_path: str = os.getenv('FFMPEG_PATH', 'ffmpeg')
        self.database_path: str = os.getenv('DATABASE_PATH', str(config.DATABASE_PATH))
        self.prune_stale_tenants: bool = os.getenv('PRUNE_STALE_TENANTS', 'false').lower() == 'true'
        self.delivery_timeout: float = float(
            os.getenv('DELIVERY_TIMEOUT_SECONDS', str(config.DELIVERY_TIMEOUT_SECONDS))
        )
