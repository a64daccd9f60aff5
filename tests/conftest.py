from __future__ import annotations

from typing import Any

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from barrace.data.dataview import Column, DataView
from barrace.data.records import DataRecord, normalize_key
from barrace.data.store import TimeSeriesStore

ROLE_COLUMNS = (
    Column("name", frozenset({"labels"})),
    Column("value", frozenset({"current_values"})),
    Column("prior", frozenset({"prior_values"})),
    Column("key", frozenset({"period_values"})),
    Column("period", frozenset({"period_labels"})),
    Column("sub", frozenset({"period_sub_labels"})),
)


def rec(name: str, value: float, key: float, prior: float | None = None, row: int = 0) -> DataRecord:
    return DataRecord(
        name=name,
        value=value,
        prior_value=value if prior is None else prior,
        time_key=normalize_key(key),
        period_label=f"P{key}",
        sub_period_label=f"S{key}",
        color=f"#{abs(hash(name)) % 0xFFFFFF:06x}",
        row_index=row,
    )


def make_store(spec: list[tuple[str, float, float]]) -> TimeSeriesStore:
    return TimeSeriesStore(rec(name, value, key, row=i) for i, (name, value, key) in enumerate(spec))


def make_view(rows: list[tuple[Any, ...]], segment: bool = False) -> DataView:
    return DataView(columns=ROLE_COLUMNS, rows=tuple(rows), segment=segment)


@pytest.fixture
def race_rows() -> list[tuple[Any, ...]]:
    return [
        ("A", 10, 9, 1.0, 2000, "Jan"),
        ("B", 5, 4, 1.0, 2000, "Jan"),
        ("C", 1, 1, 1.0, 2000, "Jan"),
        ("A", 8, 10, 1.01, 2000, "Feb"),
        ("B", 9, 5, 1.01, 2000, "Feb"),
        ("C", 2, 1, 1.01, 2000, "Feb"),
        ("A", 7, 8, 1.02, 2000, "Mar"),
        ("B", 6, 9, 1.02, 2000, "Mar"),
        ("C", 12, 2, 1.02, 2000, "Mar"),
    ]


@pytest.fixture
def scenario_store() -> TimeSeriesStore:
    return make_store(
        [
            ("A", 10, 1.0),
            ("B", 5, 1.0),
            ("C", 1, 1.0),
            ("A", 8, 1.01),
            ("B", 9, 1.01),
            ("C", 2, 1.01),
        ]
    )


@pytest.fixture
def axes():
    fig, ax = plt.subplots(figsize=(6, 3), dpi=100)
    yield ax
    plt.close(fig)
