"""
2amInDiscord - plays a chime in each server's voice channel at 2am.

This package contains the bot core, tenant storage, the scheduling and
eligibility services, and the command adapter.
"""

from twoam.core import Bot
from twoam.environment import Environment
from twoam.database import Database

__all__ = [
    'Bot',
    'Environment',
    'Database',
]
