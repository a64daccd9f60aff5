from __future__ import annotations

import logging

from barrace.data.records import build_records, coerce_number
from barrace.data.roles import map_roles
from barrace.data.store import TimeSeriesStore

from conftest import ROLE_COLUMNS


def test_coerce_number_zeroes_everything_that_is_not_a_finite_float() -> None:
    assert coerce_number("12.5") == (12.5, True)
    assert coerce_number(3) == (3.0, True)
    assert coerce_number("abc") == (0.0, False)
    assert coerce_number(None) == (0.0, False)
    assert coerce_number("nan") == (0.0, False)
    assert coerce_number(float("inf")) == (0.0, False)
    assert coerce_number(True) == (0.0, False)


def test_build_records_coerces_bad_cells_and_logs_count(caplog) -> None:
    rows = [
        ("A", "abc", None, "1.0", 2000, "Jan"),
        ("B", "7.5", "nan", 1.0, 2000.0, None),
    ]
    roles = map_roles(ROLE_COLUMNS)

    with caplog.at_level(logging.WARNING, logger="barrace.data.records"):
        records = build_records(rows, roles, lambda name: "#000000")

    assert [r.value for r in records] == [0.0, 7.5]
    assert [r.prior_value for r in records] == [0.0, 0.0]
    assert [r.time_key for r in records] == [1.0, 1.0]
    assert records[1].period_label == "2000"
    assert records[1].sub_period_label == ""
    assert [r.row_index for r in records] == [0, 1]
    assert "Coerced 3 non-numeric cells" in caplog.text


def test_build_records_resolves_color_through_callback() -> None:
    seen: list[str] = []

    def color_for(name: str) -> str:
        seen.append(name)
        return "#ff0000" if name == "A" else "#00ff00"

    rows = [("A", 1, 1, 1.0, "", ""), ("B", 1, 1, 1.0, "", "")]
    records = build_records(rows, map_roles(ROLE_COLUMNS), color_for)

    assert seen == ["A", "B"]
    assert [r.color for r in records] == ["#ff0000", "#00ff00"]


def test_time_keys_are_normalized_so_stepped_keys_match() -> None:
    rows = [("A", 1, 1, 2000 + 3 * 0.01, "", ""), ("B", 1, 1, "2000.03", "", "")]
    store = TimeSeriesStore(build_records(rows, map_roles(ROLE_COLUMNS), str))

    assert store.time_keys == (2000.03,)
    assert [r.name for r in store.records_at(2000.03)] == ["A", "B"]


def test_store_exposes_ordered_keys_and_names(scenario_store) -> None:
    assert len(scenario_store) == 6
    assert scenario_store.time_keys == (1.0, 1.01)
    assert scenario_store.min_key == 1.0
    assert scenario_store.max_key == 1.01
    assert scenario_store.names == ["A", "B", "C"]
    assert scenario_store.records_at(5.0) == ()


def test_empty_store_has_no_bounds() -> None:
    store = TimeSeriesStore([])

    assert store.is_empty
    assert store.time_keys == ()
