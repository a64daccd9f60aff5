from __future__ import annotations

from barrace.anims.snapshot import SnapshotComputer, compute_snapshot

from conftest import make_store


def test_scenario_ranks_top_two_per_key(scenario_store) -> None:
    first = compute_snapshot(scenario_store, 1.0, 2)
    second = compute_snapshot(scenario_store, 1.01, 2)

    assert [(e.name, e.rank) for e in first.entries] == [("A", 0), ("B", 1)]
    assert [(e.name, e.rank) for e in second.entries] == [("B", 0), ("A", 1)]


def test_ranks_are_contiguous_and_values_descend() -> None:
    store = make_store([(f"E{i}", float((i * 7) % 11), 3.0) for i in range(9)])

    for top_n in (1, 4, 9, 20):
        snapshot = compute_snapshot(store, 3.0, top_n)
        k = min(top_n, 9)
        values = [e.record.value for e in snapshot.entries]

        assert [e.rank for e in snapshot.entries] == list(range(k))
        assert values == sorted(values, reverse=True)


def test_equal_values_keep_row_order() -> None:
    store = make_store([("X", 5, 1.0), ("Y", 5, 1.0), ("Z", 5, 1.0)])

    for _ in range(5):
        snapshot = compute_snapshot(store, 1.0, 3)
        assert snapshot.names == ["X", "Y", "Z"]


def test_compute_is_deterministic(scenario_store) -> None:
    computer = SnapshotComputer(scenario_store, 2)

    assert computer.compute(1.01) == computer.compute(1.01)
    assert repr(computer.compute(1.0)) == repr(computer.compute(1.0))


def test_missing_key_and_non_positive_n_give_empty_snapshots(scenario_store) -> None:
    assert len(compute_snapshot(scenario_store, 7.0, 2)) == 0
    assert len(compute_snapshot(scenario_store, 1.0, 0)) == 0
    assert compute_snapshot(scenario_store, 7.0, 2).leader is None
