"""
Tests for twoam/services/scheduler.py - SchedulerService.
"""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest

from twoam.models.decision import TickReport


class TestSchedulerService:
    """Tests for tick triggering and overlap handling."""

    @pytest.fixture
    def dispatcher(self):
        dispatcher = Mock()
        dispatcher.run_tick = AsyncMock(side_effect=lambda now: TickReport(started_at=now))
        return dispatcher

    @pytest.fixture
    def scheduler(self, dispatcher):
        from twoam.services.scheduler import SchedulerService

        return SchedulerService(bot=Mock(), dispatcher=dispatcher)

    @pytest.mark.asyncio
    async def test_trigger_runs_tick_with_wall_clock(self, scheduler, dispatcher):
        before = datetime.now()
        report = await scheduler.trigger()
        after = datetime.now()

        assert isinstance(report, TickReport)
        assert before <= report.started_at <= after
        assert scheduler.last_report is report
        dispatcher.run_tick.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_overlapping_trigger_is_dropped(self, scheduler, dispatcher):
        release = asyncio.Event()

        async def slow_tick(now):
            await release.wait()
            return TickReport(started_at=now)

        dispatcher.run_tick = AsyncMock(side_effect=slow_tick)

        first = asyncio.create_task(scheduler.trigger())
        await asyncio.sleep(0)
        assert scheduler.is_running is True

        assert await scheduler.trigger() is None

        release.set()
        assert isinstance(await first, TickReport)
        assert scheduler.is_running is False
        assert dispatcher.run_tick.await_count == 1

    @pytest.mark.asyncio
    async def test_crashed_tick_does_not_stop_scheduler(self, scheduler, dispatcher):
        dispatcher.run_tick = AsyncMock(side_effect=[RuntimeError("boom"), TickReport(started_at=datetime.now())])

        assert await scheduler.trigger() is None
        assert scheduler.is_running is False
        assert isinstance(await scheduler.trigger(), TickReport)

    @pytest.mark.asyncio
    async def test_loop_body_triggers_tick(self, scheduler, dispatcher):
        await scheduler.daily_chime_loop.coro(scheduler)
        dispatcher.run_tick.assert_awaited_once()

    def test_start_tasks_registers_listener_once(self, scheduler):
        scheduler.start_tasks()
        scheduler.start_tasks()
        scheduler.bot.listen.assert_called_once_with('on_ready')
