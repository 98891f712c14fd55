"""Module-level helpers backed by a shared default scheduler."""

from typing import Any

from interval_async.scheduler import IntervalScheduler
from interval_async.types import IntervalHandle, IntervalHandler

_default_scheduler: IntervalScheduler | None = None


def get_default_scheduler() -> IntervalScheduler:
    """Get the shared scheduler, creating it on first use."""
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = IntervalScheduler()
    return _default_scheduler


def set_default_scheduler(scheduler: IntervalScheduler | None) -> None:
    """Replace the shared scheduler. None resets to a fresh default."""
    global _default_scheduler
    _default_scheduler = scheduler


def set_interval_async(
    handler: IntervalHandler, interval_ms: float, *args: Any
) -> IntervalHandle:
    """Run handler(*args) every interval_ms on the default scheduler."""
    return get_default_scheduler().start(handler, interval_ms, *args)


def clear_interval(handle: IntervalHandle) -> None:
    """Stop a handle without waiting for an in-flight invocation."""
    get_default_scheduler().stop(handle)


async def clear_interval_async(handle: IntervalHandle) -> None:
    """Stop a handle and wait for an in-flight invocation to settle."""
    await get_default_scheduler().stop_async(handle)
