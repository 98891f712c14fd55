"""Tests for the module-level helpers."""

import asyncio
from unittest.mock import AsyncMock

import pytest

import interval_async
from interval_async.api import get_default_scheduler, set_default_scheduler
from interval_async.scheduler import IntervalScheduler
from interval_async.types import IntervalState


@pytest.fixture
def default_scheduler(clock):
    scheduler = IntervalScheduler(timer=clock)
    set_default_scheduler(scheduler)
    yield scheduler
    set_default_scheduler(None)


class TestDefaultScheduler:
    """Tests for set_interval_async / clear_interval."""

    def test_default_is_created_lazily(self):
        set_default_scheduler(None)
        first = get_default_scheduler()
        assert isinstance(first, IntervalScheduler)
        assert get_default_scheduler() is first
        set_default_scheduler(None)

    @pytest.mark.asyncio
    async def test_set_and_clear(self, default_scheduler, clock):
        handler = AsyncMock()
        handle = interval_async.set_interval_async(handler, 100, "x")
        assert default_scheduler.active_handles() == [handle]

        await clock.tick_async(200)
        assert handler.await_count == 2
        handler.assert_awaited_with("x")

        interval_async.clear_interval(handle)
        await clock.tick_async(500)
        assert handler.await_count == 2
        assert handle.state is IntervalState.STOPPED

    @pytest.mark.asyncio
    async def test_clear_interval_async_waits(self, default_scheduler, clock):
        async def slow():
            await clock.wait_for(300)

        handle = interval_async.set_interval_async(slow, 100)
        await clock.next_async()
        assert handle.is_running

        stopper = asyncio.create_task(interval_async.clear_interval_async(handle))
        await clock.next_async()
        await stopper
        assert handle.state is IntervalState.STOPPED
        assert handle.invocation_count == 1

    def test_invalid_arguments(self, default_scheduler):
        with pytest.raises(interval_async.InvalidArgumentError):
            interval_async.set_interval_async("not callable", 100)
        with pytest.raises(interval_async.InvalidArgumentError):
            interval_async.set_interval_async(AsyncMock(), "100")
