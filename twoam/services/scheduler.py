"""
Scheduler driving the daily chime tick.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional

from discord.ext import tasks

from twoam import config
from twoam.models.decision import TickReport

logger = logging.getLogger(__name__)


class SchedulerService:
    """
    Fires the dispatcher once a day at `config.SCHEDULE_TIME`.

    At most one tick is in flight. A trigger that arrives while a tick is
    still running is dropped, not queued. Nothing a tick does can stop
    the loop from firing again the next day.
    """

    def __init__(self, bot, dispatcher):
        self.bot = bot
        self.dispatcher = dispatcher
        self._tick_lock = asyncio.Lock()
        self._started = False
        self.last_report: Optional[TickReport] = None

    @property
    def is_running(self) -> bool:
        """Whether a tick is currently in progress."""
        return self._tick_lock.locked()

    def start_tasks(self):
        """Schedule the daily loop to start when the bot is ready."""
        if self._started:
            return
        self._started = True

        @self.bot.listen('on_ready')
        async def on_ready_start_scheduler():
            if not self.daily_chime_loop.is_running():
                self.daily_chime_loop.start()
                logger.info(f"[Scheduler] Daily chime scheduled at {config.SCHEDULE_TIME:%H:%M} local time")

    async def trigger(self) -> Optional[TickReport]:
        """
        Run one tick now unless one is already running.

        Returns:
            The tick report, or None when the trigger was dropped or the
            tick crashed.
        """
        if self._tick_lock.locked():
            logger.warning("[Scheduler] Previous tick still running, dropping this trigger")
            return None

        async with self._tick_lock:
            try:
                report = await self.dispatcher.run_tick(datetime.now())
            except Exception:
                logger.exception("[Scheduler] Tick crashed")
                return None
            self.last_report = report
            return report

    @tasks.loop(time=config.SCHEDULE_TIME)
    async def daily_chime_loop(self):
        await self.trigger()

    @daily_chime_loop.before_loop
    async def before_daily_chime_loop(self):
        await self.bot.wait_until_ready()
