"""Interval scheduler types.

Public types:
- IntervalHandle: Opaque token for one schedule, returned by start()
- IntervalState: WAITING / RUNNING / STOPPED
- HandlerFailure: Record of one failed handler invocation
- IntervalHandler: Callable invoked on every tick
- FailureObserver: Callback receiving HandlerFailure records
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Usually returns an awaitable; a plain return value counts as settled
IntervalHandler = Callable[..., Awaitable[Any] | None]


class IntervalState(Enum):
    """Scheduling state of a handle."""

    WAITING = "waiting"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True)
class HandlerFailure:
    """One handler invocation that raised."""

    handle_id: str
    error: BaseException
    invocation: int  # 1-based
    started_at_ms: float
    failed_at_ms: float


FailureObserver = Callable[[HandlerFailure], None]


@dataclass(eq=False)
class IntervalHandle:
    """An active or stopped schedule.

    Handles are created by IntervalScheduler.start() and only mutated by the
    scheduler that owns them.
    """

    id: str
    handler: IntervalHandler
    interval_ms: float
    args: tuple[Any, ...] = ()
    stopped: bool = False
    state: IntervalState = IntervalState.WAITING
    invocation_count: int = 0
    failure_count: int = 0
    # Currently pending wait, replaced on every tick
    _wait: asyncio.Task[None] | None = field(default=None, repr=False)
    _task: asyncio.Task[None] | None = field(default=None, repr=False)

    @property
    def is_running(self) -> bool:
        return self.state is IntervalState.RUNNING
