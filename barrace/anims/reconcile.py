"""Keyed enter/update/exit reconciliation.

Diffs the currently bound entities against a new snapshot by name. The
result is expressed in rank space and durations only; turning ranks into
pixels and mutating artists is the scene adapter's job.
"""

from dataclasses import dataclass
from enum import Enum

from ..data.records import DataRecord
from .snapshot import Snapshot


class Phase(Enum):
    ENTER = "enter"
    UPDATE = "update"
    EXIT = "exit"


@dataclass(frozen=True)
class BoundEntity:
    record: DataRecord
    rank: int


@dataclass(frozen=True)
class Instruction:
    """Animate one entity from a start to an end state over ``duration_ms``."""

    key: str
    phase: Phase
    record: DataRecord
    start_rank: float
    end_rank: float
    start_value: float
    end_value: float
    duration_ms: float
    remove_on_complete: bool = False

    def at(self, t: float) -> tuple[float, float]:
        """Linear (rank, value) at fraction ``t`` of the transition."""
        t = min(1.0, max(0.0, t))
        rank = self.start_rank + (self.end_rank - self.start_rank) * t
        value = self.start_value + (self.end_value - self.start_value) * t
        return rank, value


@dataclass(frozen=True)
class ReconcilePlan:
    entering: tuple[Instruction, ...]
    persisting: tuple[Instruction, ...]
    exiting: tuple[Instruction, ...]
    duration_ms: float

    def __iter__(self):
        yield from self.exiting
        yield from self.persisting
        yield from self.entering

    @property
    def keys(self) -> dict[Phase, list[str]]:
        return {
            Phase.ENTER: [i.key for i in self.entering],
            Phase.UPDATE: [i.key for i in self.persisting],
            Phase.EXIT: [i.key for i in self.exiting],
        }


class ReconciliationBinder:
    """Keeps the bound entity set and diffs it against each new snapshot.

    Args:
        top_n: Bar slots; rank ``top_n + 1`` is the off-screen position.
    """

    def __init__(self, top_n: int) -> None:
        self.top_n = top_n
        self.bound: dict[str, BoundEntity] = {}

    @property
    def offscreen_rank(self) -> int:
        return self.top_n + 1

    def reset(self) -> None:
        self.bound = {}

    def bind(self, snapshot: Snapshot, duration_ms: float) -> ReconcilePlan:
        """Diff ``snapshot`` against the bound set and rebind to it.

        Args:
            snapshot: The new snapshot.
            duration_ms: Transition length.

        Returns:
            ReconcilePlan partitioned into entering, persisting and exiting.
        """
        off = float(self.offscreen_rank)
        entering: list[Instruction] = []
        persisting: list[Instruction] = []
        incoming: dict[str, BoundEntity] = {}

        for entry in snapshot.entries:
            record = entry.record
            incoming[record.name] = BoundEntity(record, entry.rank)
            previous = self.bound.get(record.name)
            if previous is None:
                entering.append(
                    Instruction(
                        key=record.name,
                        phase=Phase.ENTER,
                        record=record,
                        start_rank=off,
                        end_rank=float(entry.rank),
                        start_value=record.value,
                        end_value=record.value,
                        duration_ms=duration_ms,
                    )
                )
            else:
                persisting.append(
                    Instruction(
                        key=record.name,
                        phase=Phase.UPDATE,
                        record=record,
                        start_rank=float(previous.rank),
                        end_rank=float(entry.rank),
                        start_value=record.prior_value,
                        end_value=record.value,
                        duration_ms=duration_ms,
                    )
                )

        exiting = [
            Instruction(
                key=name,
                phase=Phase.EXIT,
                record=old.record,
                start_rank=float(old.rank),
                end_rank=off,
                start_value=old.record.value,
                end_value=old.record.value,
                duration_ms=duration_ms,
                remove_on_complete=True,
            )
            for name, old in self.bound.items()
            if name not in incoming
        ]

        self.bound = incoming
        return ReconcilePlan(
            entering=tuple(entering),
            persisting=tuple(persisting),
            exiting=tuple(exiting),
            duration_ms=duration_ms,
        )
