"""Interval scheduler: runs async handlers repeatedly without overlap.

Each handle gets its own loop task that alternates between two suspension
points: a cancellable wait, and the handler's awaitable. A new wait is only
started once the previous invocation has settled, so invocations of one
handle never overlap. The next delay is shortened by however long the
invocation took, down to zero, so a handler that outruns its interval runs
back-to-back instead of queueing.
"""

import asyncio
import inspect
import logging
import math
import numbers
from typing import Any
from uuid import uuid4

from interval_async.config import IntervalConfig
from interval_async.errors import InvalidArgumentError
from interval_async.observers import log_failure
from interval_async.timers import LoopTimer, Timer
from interval_async.types import (
    FailureObserver,
    HandlerFailure,
    IntervalHandle,
    IntervalHandler,
    IntervalState,
)

logger = logging.getLogger(__name__)


class IntervalScheduler:
    """Registry and driver for interval handles.

    Example:
        scheduler = IntervalScheduler()

        async def poll(source):
            await source.refresh()

        handle = scheduler.start(poll, 5000, source)
        ...
        await scheduler.stop_async(handle)
    """

    def __init__(
        self,
        timer: Timer | None = None,
        on_failure: FailureObserver | None = None,
        config: IntervalConfig | None = None,
    ):
        self._config = config or IntervalConfig()
        self._timer: Timer = timer or LoopTimer()
        if on_failure is None and self._config.log_failures:
            on_failure = log_failure
        self._on_failure = on_failure
        self._handles: dict[str, IntervalHandle] = {}

    @property
    def timer(self) -> Timer:
        return self._timer

    @property
    def config(self) -> IntervalConfig:
        return self._config

    def __len__(self) -> int:
        return len(self._handles)

    def active_handles(self) -> list[IntervalHandle]:
        """Handles whose loop has not exited yet."""
        return list(self._handles.values())

    def start(
        self, handler: IntervalHandler, interval_ms: float, *args: Any
    ) -> IntervalHandle:
        """Invoke handler(*args) every interval_ms until stopped.

        The first invocation happens interval_ms after this call. Must be
        called while an event loop is running.

        Raises:
            InvalidArgumentError: If handler is not callable or interval_ms
                is not a finite number within the configured bounds.
        """
        self._validate_handler(handler)
        self._validate_interval(interval_ms)

        loop = asyncio.get_running_loop()
        handle_id = self._new_id()
        handle = IntervalHandle(
            id=handle_id,
            handler=handler,
            interval_ms=float(interval_ms),
            args=args,
        )
        self._handles[handle_id] = handle
        handle._task = loop.create_task(
            self._run(handle), name=f"interval-{handle_id}"
        )
        logger.debug(
            "interval_started",
            extra={"interval.id": handle_id, "interval.ms": handle.interval_ms},
        )
        return handle

    def stop(self, handle: Any) -> None:
        """Stop a handle. Unknown or already-stopped handles are ignored.

        A pending wait is cancelled right away. An invocation in flight is
        left to finish, but no further invocation will start.
        """
        if not self._owns(handle) or handle.stopped:
            return
        handle.stopped = True
        if handle._wait is not None:
            handle._wait.cancel()
        if handle.state is IntervalState.WAITING:
            handle.state = IntervalState.STOPPED
        logger.debug(
            "interval_stopped",
            extra={
                "interval.id": handle.id,
                "interval.invocations": handle.invocation_count,
                "interval.in_flight": handle.is_running,
            },
        )

    async def stop_async(self, handle: Any) -> None:
        """Stop a handle and wait for any in-flight invocation to settle.

        From inside the handle's own handler this only stops; waiting for
        itself would never return.
        """
        if not self._owns(handle):
            return
        self.stop(handle)
        await self._join([handle])

    async def stop_all(self) -> None:
        """Stop every handle and wait for all of them to settle."""
        handles = self.active_handles()
        for handle in handles:
            self.stop(handle)
        await self._join(handles)

    async def _join(self, handles: list[IntervalHandle]) -> None:
        current = asyncio.current_task()
        tasks = {
            h._task
            for h in handles
            if h._task is not None and h._task is not current and not h._task.done()
        }
        if tasks:
            await asyncio.wait(tasks)

    async def _run(self, handle: IntervalHandle) -> None:
        delay = handle.interval_ms
        try:
            while not handle.stopped:
                handle.state = IntervalState.WAITING
                handle._wait = asyncio.ensure_future(self._timer.wait_for(delay))
                try:
                    await handle._wait
                except asyncio.CancelledError:
                    task = asyncio.current_task()
                    if task is not None and task.cancelling():
                        raise
                    # Wait cancelled by stop()
                    break
                finally:
                    handle._wait = None

                if handle.stopped:
                    break

                handle.state = IntervalState.RUNNING
                started_at = self._timer.now()
                await self._invoke(handle, started_at)
                elapsed = self._timer.now() - started_at
                delay = max(0.0, handle.interval_ms - elapsed)
        finally:
            handle.stopped = True
            handle.state = IntervalState.STOPPED
            if self._handles.get(handle.id) is handle:
                del self._handles[handle.id]

    async def _invoke(self, handle: IntervalHandle, started_at: float) -> None:
        handle.invocation_count += 1
        try:
            result = handle.handler(*handle.args)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError as e:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            # Cancelled inside the handler only; the loop itself was not
            self._record_failure(handle, e, started_at)
        except Exception as e:
            self._record_failure(handle, e, started_at)

    def _record_failure(
        self, handle: IntervalHandle, error: BaseException, started_at: float
    ) -> None:
        handle.failure_count += 1
        self._report_failure(
            HandlerFailure(
                handle_id=handle.id,
                error=error,
                invocation=handle.invocation_count,
                started_at_ms=started_at,
                failed_at_ms=self._timer.now(),
            )
        )

    def _report_failure(self, failure: HandlerFailure) -> None:
        if self._on_failure is None:
            return
        try:
            self._on_failure(failure)
        except Exception:
            logger.exception(
                "interval_failure_observer_error",
                extra={"interval.id": failure.handle_id},
            )

    def _owns(self, handle: Any) -> bool:
        handle_id = getattr(handle, "id", None)
        return isinstance(handle_id, str) and self._handles.get(handle_id) is handle

    def _new_id(self) -> str:
        while True:
            handle_id = uuid4().hex[:8]
            if handle_id not in self._handles:
                return handle_id

    def _validate_handler(self, handler: Any) -> None:
        if not callable(handler):
            raise InvalidArgumentError("handler", handler, "a callable")

    def _validate_interval(self, interval_ms: Any) -> None:
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, numbers.Real):
            raise InvalidArgumentError("interval_ms", interval_ms, "a finite number")
        try:
            finite = math.isfinite(interval_ms)
        except OverflowError:
            finite = False
        if not finite:
            raise InvalidArgumentError("interval_ms", interval_ms, "a finite number")
        low = self._config.min_interval_ms
        high = self._config.max_interval_ms
        if low is not None and interval_ms < low:
            raise InvalidArgumentError(
                "interval_ms", interval_ms, f"a number of at least {low:g}"
            )
        if high is not None and interval_ms > high:
            raise InvalidArgumentError(
                "interval_ms", interval_ms, f"a number of at most {high:g}"
            )
