"""Playback state container used by the scheduler.

Tracks where playback is in the time series and whether it wraps around
when it runs past the last key.
"""

import enum


class Status(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class AnimationState:
    """Holds the playback status for one visual session.

    Args:
        start_key: Minimum time key of the store.
        loop: Whether playback restarts after the last key.
    """

    def __init__(self, start_key: float, loop: bool = False) -> None:
        self.status: Status = Status.IDLE
        self.current_time_key: float = start_key
        self.step_index: int = 0
        self.loop: bool = loop

    def __repr__(self) -> str:
        return (
            f"AnimationState(status={self.status.value}, "
            f"current_time_key={self.current_time_key}, loop={self.loop})"
        )
