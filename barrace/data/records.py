"""Convert raw rows into typed records.

Numeric cells that do not parse to a finite float are coerced to ``0.0``
here, once. Nothing downstream filters records a second time.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from ..core.constants import KEY_PRECISION
from .roles import RoleAssignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataRecord:
    name: str
    value: float
    prior_value: float
    time_key: float
    period_label: str
    sub_period_label: str
    color: str
    row_index: int = 0


def normalize_key(key: float) -> float:
    """Round a time key so stepped keys compare equal to parsed ones."""
    return round(key, KEY_PRECISION)


def coerce_number(raw: Any) -> tuple[float, bool]:
    """Parse ``raw`` as a finite float.

    Returns:
        (number, ok). ``number`` is ``0.0`` when ``ok`` is False.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0, False
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return 0.0, False
    if not math.isfinite(number):
        return 0.0, False
    return number, True


def _text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def build_records(
    rows: Iterable[Sequence[Any]],
    roles: RoleAssignment,
    color_for: Callable[[str], str],
) -> list[DataRecord]:
    """Build DataRecords from raw rows.

    Args:
        rows: Raw rows in host order.
        roles: Column index per role.
        color_for: Palette lookup, called with each record's name.

    Returns:
        Records in row order.
    """
    records: list[DataRecord] = []
    coerced = 0
    for row_index, row in enumerate(rows):
        name = _text(row[roles.label])
        value, ok_value = coerce_number(row[roles.current_value])
        prior_value, ok_prior = coerce_number(row[roles.prior_value])
        time_key, ok_key = coerce_number(row[roles.period_value])
        coerced += (not ok_value) + (not ok_prior) + (not ok_key)
        records.append(
            DataRecord(
                name=name,
                value=value,
                prior_value=prior_value,
                time_key=normalize_key(time_key),
                period_label=_text(row[roles.period_label]),
                sub_period_label=_text(row[roles.period_sub_label]),
                color=color_for(name),
                row_index=row_index,
            )
        )
    if coerced:
        logger.warning("Coerced %d non-numeric cells to 0 across %d rows", coerced, len(records))
    return records
