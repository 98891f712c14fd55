"""Timer collaborators.

The scheduler never measures or waits on time itself; it asks a Timer.

- LoopTimer: Real time from the running event loop
- ManualTimer: Virtual clock that only moves when told to

Example:
    clock = ManualTimer()
    scheduler = IntervalScheduler(timer=clock)
    scheduler.start(handler, 1000)

    await clock.next_async()  # clock.now() == 1000, handler invoked
"""

import asyncio
import heapq
import itertools
from typing import Protocol

# Event-loop iterations to run after firing a manual wait so that the tasks
# woken by it reach their next suspension point.
DEFAULT_SETTLE_ROUNDS = 10


class Timer(Protocol):
    """Source of time and cancellable waits, in milliseconds."""

    def now(self) -> float: ...

    async def wait_for(self, duration_ms: float) -> None: ...


class LoopTimer:
    """Timer backed by the running asyncio event loop."""

    def now(self) -> float:
        return asyncio.get_running_loop().time() * 1000

    async def wait_for(self, duration_ms: float) -> None:
        await asyncio.sleep(max(0.0, duration_ms) / 1000)


class ManualTimer:
    """Virtual clock for deterministic scheduling.

    Waits registered through wait_for() only complete when the clock is
    advanced with next_async() or tick_async(). Waits due at the same instant
    fire in registration order.
    """

    def __init__(
        self,
        start_ms: float = 0.0,
        settle_rounds: int = DEFAULT_SETTLE_ROUNDS,
    ):
        self._now = start_ms
        self._settle_rounds = settle_rounds
        self._queue: list[tuple[float, int, asyncio.Future[None]]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of waits that have not fired or been cancelled."""
        return sum(1 for _, _, fut in self._queue if not fut.done())

    async def wait_for(self, duration_ms: float) -> None:
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        deadline = self._now + max(0.0, duration_ms)
        heapq.heappush(self._queue, (deadline, next(self._seq), fut))
        # Cancelling the awaiting task cancels fut; cancelled entries stay
        # queued until they reach the head and _discard_done() pops them
        await fut

    async def settle(self) -> None:
        """Let woken tasks run until they suspend again."""
        for _ in range(self._settle_rounds):
            await asyncio.sleep(0)

    async def next_async(self) -> bool:
        """Advance to the earliest pending wait and fire it.

        Returns:
            False if nothing was pending.
        """
        await self.settle()
        self._discard_done()
        if not self._queue:
            return False
        deadline, _, fut = heapq.heappop(self._queue)
        self._now = max(self._now, deadline)
        fut.set_result(None)
        await self.settle()
        return True

    async def tick_async(self, duration_ms: float) -> int:
        """Advance the clock by duration_ms, firing every wait that comes due.

        Returns:
            Number of waits fired.
        """
        target = self._now + duration_ms
        fired = 0
        while True:
            await self.settle()
            self._discard_done()
            if not self._queue or self._queue[0][0] > target:
                break
            deadline, _, fut = heapq.heappop(self._queue)
            self._now = max(self._now, deadline)
            fut.set_result(None)
            fired += 1
        self._now = max(self._now, target)
        return fired

    def _discard_done(self) -> None:
        while self._queue and self._queue[0][2].done():
            heapq.heappop(self._queue)
