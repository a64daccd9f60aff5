"""Ordered collection of records for one data update."""

from typing import Iterable

from .records import DataRecord, normalize_key


class TimeSeriesStore:
    """Read-only record store indexed by time key.

    Rebuilt wholesale on every data update.
    """

    def __init__(self, records: Iterable[DataRecord]) -> None:
        self._records = tuple(records)
        by_key: dict[float, list[DataRecord]] = {}
        for record in self._records:
            by_key.setdefault(record.time_key, []).append(record)
        self._by_key = {key: tuple(group) for key, group in by_key.items()}
        self.time_keys: tuple[float, ...] = tuple(sorted(self._by_key))

    def __len__(self) -> int:
        return len(self._records)

    @property
    def is_empty(self) -> bool:
        return not self._records

    @property
    def records(self) -> tuple[DataRecord, ...]:
        return self._records

    @property
    def min_key(self) -> float:
        if not self.time_keys:
            raise ValueError("store is empty")
        return self.time_keys[0]

    @property
    def max_key(self) -> float:
        if not self.time_keys:
            raise ValueError("store is empty")
        return self.time_keys[-1]

    @property
    def names(self) -> list[str]:
        return list(dict.fromkeys(r.name for r in self._records))

    def records_at(self, time_key: float) -> tuple[DataRecord, ...]:
        """Records whose key equals ``time_key``, in row order."""
        return self._by_key.get(normalize_key(time_key), ())
