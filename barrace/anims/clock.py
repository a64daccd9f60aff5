"""Event loop seam for the scheduler.

The scheduler only needs ``time()`` and ``call_at()`` returning a handle
with ``cancel()``; an ``asyncio`` event loop provides both for live
playback. ``VirtualClock`` runs the same callbacks without waiting, which
is how exports and tests drive playback.
"""

import heapq
import itertools
from typing import Any, Callable, Protocol


class Handle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    def time(self) -> float: ...

    def call_at(self, when: float, callback: Callable[..., Any], *args: Any) -> Handle: ...


class VirtualHandle:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self._callback = callback
        self._args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def run(self) -> None:
        self._callback(*self._args)


class VirtualClock:
    """Deterministic clock: time only moves when a callback is run.

    Args:
        start: Initial time in seconds.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, VirtualHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self._now

    def call_at(self, when: float, callback: Callable[..., Any], *args: Any) -> VirtualHandle:
        handle = VirtualHandle(when, callback, args)
        heapq.heappush(self._queue, (when, next(self._seq), handle))
        return handle

    def advance(self, seconds: float) -> None:
        """Move time forward without running anything, as a slow tick would."""
        self._now += seconds

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def step(self) -> bool:
        """Run the next pending callback. Returns False when none is left."""
        while self._queue:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = max(self._now, when)
            handle.run()
            return True
        return False

    def run(self, max_steps: int | None = None) -> int:
        """Run callbacks until the queue drains or ``max_steps`` is reached."""
        steps = 0
        while max_steps is None or steps < max_steps:
            if not self.step():
                break
            steps += 1
        return steps
