"""Async-aware repeating timers.

Public API:
- IntervalScheduler: Starts and stops non-overlapping interval handlers
- set_interval_async / clear_interval / clear_interval_async: Same, on a
  shared default scheduler

Types:
- IntervalHandle: Token returned by start()
- IntervalState: WAITING / RUNNING / STOPPED
- HandlerFailure: Record passed to failure observers
- IntervalConfig: Scheduler configuration

Timers:
- LoopTimer: Real event-loop time (default)
- ManualTimer: Virtual clock for deterministic tests
"""

from interval_async.api import (
    clear_interval,
    clear_interval_async,
    get_default_scheduler,
    set_default_scheduler,
    set_interval_async,
)
from interval_async.config import IntervalConfig, load_config
from interval_async.errors import IntervalError, InvalidArgumentError
from interval_async.observers import chain_observers, collect_failures, log_failure
from interval_async.scheduler import IntervalScheduler
from interval_async.timers import LoopTimer, ManualTimer, Timer
from interval_async.types import (
    FailureObserver,
    HandlerFailure,
    IntervalHandle,
    IntervalHandler,
    IntervalState,
)

__all__ = [
    "FailureObserver",
    "HandlerFailure",
    "IntervalConfig",
    "IntervalError",
    "IntervalHandle",
    "IntervalHandler",
    "IntervalScheduler",
    "IntervalState",
    "InvalidArgumentError",
    "LoopTimer",
    "ManualTimer",
    "Timer",
    "chain_observers",
    "clear_interval",
    "clear_interval_async",
    "collect_failures",
    "get_default_scheduler",
    "load_config",
    "log_failure",
    "set_default_scheduler",
    "set_interval_async",
]
