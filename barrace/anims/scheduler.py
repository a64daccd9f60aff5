"""Timer-driven playback state machine.

One handle is pending at a time. Each fire runs the whole tick (snapshot,
transition callback) synchronously, then schedules the next fire at the next
deadline of a fixed cadence. Deadlines that already passed while a tick was
running are skipped rather than queued.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable

from ..core.constants import KEY_PRECISION, TIME_STEP
from ..data.store import TimeSeriesStore
from .clock import Clock, Handle
from .snapshot import Snapshot, SnapshotComputer
from .state import AnimationState, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transition:
    previous: Snapshot
    current: Snapshot
    duration_ms: float


class AnimationScheduler:
    """Advances the time key and emits a transition per tick.

    Args:
        store: Records for the session.
        clock: Event loop providing ``time()`` and ``call_at()``.
        top_n: Bars per snapshot.
        interval_ms: Tick period and transition duration.
        loop: Restart from the first key after the last one.
        on_transition: Called with each Transition.
        on_finished: Called once playback reaches the end without looping.
        step: Time key increment per tick.
    """

    def __init__(
        self,
        store: TimeSeriesStore,
        clock: Clock,
        top_n: int,
        interval_ms: float,
        loop: bool = False,
        on_transition: Callable[[Transition], None] | None = None,
        on_finished: Callable[[], None] | None = None,
        step: float = TIME_STEP,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.store = store
        self.clock = clock
        self.computer = SnapshotComputer(store, top_n)
        self.interval = interval_ms / 1000.0
        self.interval_ms = interval_ms
        self.step = step
        self.on_transition = on_transition
        self.on_finished = on_finished

        self._min_key = store.min_key if not store.is_empty else 0.0
        self._max_key = store.max_key if not store.is_empty else 0.0
        self.state = AnimationState(self._min_key, loop=loop)
        self.snapshot = self.computer.compute(self._min_key)

        self._handle: Handle | None = None
        self._deadline: float = 0.0
        self.fire_count = 0
        self.skipped_ticks = 0

    @property
    def status(self) -> Status:
        return self.state.status

    @property
    def current_time_key(self) -> float:
        return self.state.current_time_key

    @property
    def loop(self) -> bool:
        return self.state.loop

    @loop.setter
    def loop(self, value: bool) -> None:
        self.state.loop = value

    @property
    def is_active(self) -> bool:
        return self._handle is not None

    def key_at(self, index: int) -> float:
        return round(self._min_key + index * self.step, KEY_PRECISION)

    def play(self) -> None:
        """Start, restart or resume playback."""
        status = self.state.status
        if status is Status.RUNNING:
            return
        if self.store.is_empty:
            logger.info("play() ignored: no records loaded")
            return
        if status in (Status.IDLE, Status.FINISHED):
            self.state.current_time_key = self._min_key
            # first fire shows the first key unless it is already on screen
            self.state.step_index = 0 if self.snapshot.time_key == self._min_key else -1
        self.state.status = Status.RUNNING
        self._deadline = self.clock.time()
        self._schedule()
        logger.debug(
            "Playback %s at key %s",
            "resumed" if status is Status.PAUSED else "started",
            self.state.current_time_key,
        )

    def pause(self) -> None:
        """Pause a running playback. No-op in any other state."""
        if self.state.status is not Status.RUNNING:
            return
        self._cancel()
        self.state.status = Status.PAUSED

    def toggle(self) -> None:
        if self.state.status is Status.RUNNING:
            self.pause()
        else:
            self.play()

    def stop(self) -> None:
        """Cancel any pending tick. Safe from every state."""
        self._cancel()
        self.state.status = Status.IDLE

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _schedule(self) -> None:
        now = self.clock.time()
        self._deadline += self.interval
        if self._deadline < now:
            missed = math.ceil((now - self._deadline) / self.interval)
            self._deadline += missed * self.interval
            self.skipped_ticks += missed
            logger.debug("Tick overran; skipped %d deadline(s)", missed)
        self._handle = self.clock.call_at(self._deadline, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if self.state.status is not Status.RUNNING:
            return
        self.fire_count += 1

        index = self.state.step_index + 1
        key = self.key_at(index)
        if key > self._max_key:
            if not self.state.loop:
                self.state.status = Status.FINISHED
                logger.info("Playback finished at key %s", self.state.current_time_key)
                if self.on_finished is not None:
                    self.on_finished()
                return
            index, key = 0, self._min_key

        self.state.step_index = index
        self.state.current_time_key = key
        previous = self.snapshot
        self.snapshot = self.computer.compute(key)
        if self.on_transition is not None:
            try:
                self.on_transition(Transition(previous, self.snapshot, self.interval_ms))
            except Exception:
                # leave a resumable state: no timer, Paused at this key
                logger.exception("Transition to key %s failed; playback paused", key)
                self._cancel()
                self.state.status = Status.PAUSED
                raise

        # a callback may have paused or stopped playback
        if self.state.status is Status.RUNNING and self._handle is None:
            self._schedule()
