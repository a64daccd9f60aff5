from __future__ import annotations

import pytest

from barrace.data.dataview import Column
from barrace.data.roles import MissingRoleError, RoleAssignment, map_roles

from conftest import ROLE_COLUMNS


def test_map_roles_resolves_every_role() -> None:
    roles = map_roles(ROLE_COLUMNS)

    assert roles == RoleAssignment(
        label=0,
        current_value=1,
        prior_value=2,
        period_value=3,
        period_label=4,
        period_sub_label=5,
    )


def test_map_roles_accepts_camel_case_role_names() -> None:
    columns = [
        Column("sub", frozenset({"periodSubLabel"})),
        Column("key", frozenset({"periodKey"})),
        Column("label", frozenset({"periodLabel"})),
        Column("name", frozenset({"label"})),
        Column("prior", frozenset({"priorValue"})),
        Column("value", frozenset({"currentValue"})),
    ]
    roles = map_roles(columns)

    assert roles.period_sub_label == 0
    assert roles.period_value == 1
    assert roles.label == 3
    assert roles.current_value == 5


def test_map_roles_names_every_missing_role() -> None:
    columns = [Column("name", frozenset({"labels"})), Column("value", frozenset({"current_values"}))]

    with pytest.raises(MissingRoleError) as excinfo:
        map_roles(columns)

    assert excinfo.value.missing == (
        "prior_value",
        "period_value",
        "period_label",
        "period_sub_label",
    )


def test_map_roles_never_guesses_from_position() -> None:
    columns = [Column(name) for name in ("name", "value", "prior", "key", "period", "sub")]

    with pytest.raises(MissingRoleError) as excinfo:
        map_roles(columns)

    assert len(excinfo.value.missing) == 6


def test_map_roles_last_tagged_column_wins_and_unknown_tags_are_ignored() -> None:
    columns = list(ROLE_COLUMNS) + [Column("value2", frozenset({"current_values", "tooltips"}))]

    assert map_roles(columns).current_value == 6


def test_role_assignment_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        RoleAssignment(
            label=-1,
            current_value=1,
            prior_value=2,
            period_value=3,
            period_label=4,
            period_sub_label=5,
        )
