"""Ranked top-N snapshots of the store at one time key."""

from dataclasses import dataclass

from ..data.records import DataRecord, normalize_key
from ..data.store import TimeSeriesStore


@dataclass(frozen=True)
class SnapshotEntry:
    record: DataRecord
    rank: int

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(frozen=True)
class Snapshot:
    time_key: float
    entries: tuple[SnapshotEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def names(self) -> list[str]:
        return [e.record.name for e in self.entries]

    @property
    def max_value(self) -> float:
        return max((e.record.value for e in self.entries), default=0.0)

    @property
    def leader(self) -> DataRecord | None:
        return self.entries[0].record if self.entries else None


def compute_snapshot(store: TimeSeriesStore, time_key: float, top_n: int) -> Snapshot:
    """Rank the records at ``time_key`` by descending value.

    Python's sort is stable, so equal values keep their row order.

    Args:
        store: Records for the session.
        time_key: Exact key to select.
        top_n: Maximum number of entries.

    Returns:
        Snapshot with ranks ``0..k-1``.
    """
    key = normalize_key(time_key)
    if top_n <= 0:
        return Snapshot(time_key=key)
    ranked = sorted(store.records_at(key), key=lambda r: -r.value)[:top_n]
    return Snapshot(
        time_key=key,
        entries=tuple(SnapshotEntry(record=r, rank=i) for i, r in enumerate(ranked)),
    )


class SnapshotComputer:
    """Binds a store so the scheduler can ask for snapshots by key."""

    def __init__(self, store: TimeSeriesStore, top_n: int) -> None:
        self.store = store
        self.top_n = top_n

    def compute(self, time_key: float) -> Snapshot:
        return compute_snapshot(self.store, time_key, self.top_n)
