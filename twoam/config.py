"""
Centralized configuration for the 2amInDiscord bot.

Constants only. Values that come from the deployment (token, ffmpeg path,
database location) are loaded by `twoam.environment.Environment`.
"""

import datetime
from pathlib import Path

# ============================================================================
# Paths
# ============================================================================

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.absolute()

# Audio assets directory
ASSETS_DIR = PROJECT_ROOT / "Assets"

# Daily log files
LOGS_DIR = PROJECT_ROOT / "Logs"

# Default database path
DATABASE_PATH = PROJECT_ROOT / "database.db"


# ============================================================================
# Discord Configuration
# ============================================================================

# Text command prefix, e.g. "!2amInDiscord set General"
COMMAND_PREFIX = "!2amInDiscord"

# Chime played in the destination channel
CHIME_MEDIA = ASSETS_DIR / "WhyAreYouOnDiscord.mp3"


# ============================================================================
# Scheduling
# ============================================================================

# Daily tick at 02:00 host local time
SCHEDULE_HOUR = 2
SCHEDULE_MINUTE = 0
SCHEDULE_TIME = datetime.time(
    hour=SCHEDULE_HOUR,
    minute=SCHEDULE_MINUTE,
    tzinfo=datetime.datetime.now().astimezone().tzinfo,
)

# Upper bound for join + play + leave on one destination
DELIVERY_TIMEOUT_SECONDS = 60.0

# Hours between chimes; stored per tenant, not enforced yet
DEFAULT_FREQUENCY_HOURS = 24

# Persisted mute_until format (sortable)
MUTE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
