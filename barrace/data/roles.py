"""Resolve semantic roles to column positions."""

from dataclasses import dataclass, fields
from typing import Sequence

from .dataview import Column
from .normalize_inputs import normalize_role

REQUIRED_ROLES = (
    "label",
    "current_value",
    "prior_value",
    "period_value",
    "period_label",
    "period_sub_label",
)


class MissingRoleError(ValueError):
    """Raised when one or more required roles have no column."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"missing required roles: {', '.join(self.missing)}")


@dataclass(frozen=True)
class RoleAssignment:
    """Column index for each semantic role."""

    label: int
    current_value: int
    prior_value: int
    period_value: int
    period_label: int
    period_sub_label: int

    def __post_init__(self) -> None:
        for f in fields(self):
            index = getattr(self, f.name)
            if not isinstance(index, int) or index < 0:
                raise ValueError(f"{f.name} must be a column index, got {index!r}")


def map_roles(columns: Sequence[Column]) -> RoleAssignment:
    """Map every required role to a column.

    When several columns carry the same role the last one wins, following
    the host's column order. Unknown tags are ignored.

    Args:
        columns: Column metadata in data view order.

    Returns:
        RoleAssignment with one index per role.

    Raises:
        MissingRoleError: If any required role has no column.
    """
    found: dict[str, int] = {}
    for index, column in enumerate(columns):
        for tag in column.roles:
            role = normalize_role(tag)
            if role is not None:
                found[role] = index

    missing = [role for role in REQUIRED_ROLES if role not in found]
    if missing:
        raise MissingRoleError(missing)
    return RoleAssignment(**{role: found[role] for role in REQUIRED_ROLES})
