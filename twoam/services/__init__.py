"""
Service layer providing business logic.

Services encapsulate business operations and coordinate between
repositories, Discord and each other.
"""

from twoam.services.dispatcher import NotificationDispatcher
from twoam.services.scheduler import SchedulerService
from twoam.services.tenant import TenantService
from twoam.services.voice import VoiceService

__all__ = [
    "NotificationDispatcher",
    "SchedulerService",
    "TenantService",
    "VoiceService",
]
