"""Shared test fixtures and factories."""

from unittest.mock import AsyncMock

import pytest

from interval_async.observers import collect_failures
from interval_async.scheduler import IntervalScheduler
from interval_async.timers import ManualTimer
from interval_async.types import HandlerFailure

# =============================================================================
# Clock & Scheduler Fixtures
# =============================================================================


@pytest.fixture
def clock() -> ManualTimer:
    """Virtual clock starting at t=0."""
    return ManualTimer()


@pytest.fixture
def failures() -> list[HandlerFailure]:
    """Sink for failures reported by the scheduler."""
    return []


@pytest.fixture
def scheduler(clock: ManualTimer, failures: list[HandlerFailure]) -> IntervalScheduler:
    """Scheduler driven by the virtual clock, collecting failures."""
    return IntervalScheduler(timer=clock, on_failure=collect_failures(failures))


# =============================================================================
# Handler Factories
# =============================================================================


def make_handler(clock: ManualTimer, duration_ms: float) -> AsyncMock:
    """Async handler spy that takes duration_ms of virtual time."""

    async def _run(*args):
        await clock.wait_for(duration_ms)

    return AsyncMock(side_effect=_run)


def make_failing_handler(message: str = "Some Error") -> AsyncMock:
    """Async handler spy that always raises."""
    return AsyncMock(side_effect=RuntimeError(message))
