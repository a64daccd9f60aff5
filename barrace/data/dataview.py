"""Tabular input handed to the visual by its host."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import pandas as pd


@dataclass(frozen=True)
class Column:
    """A column of the data view with the role tags the host assigned."""

    name: str
    roles: frozenset[str] = frozenset()


@dataclass(frozen=True)
class DataView:
    """Columns plus rows in host order.

    ``segment`` is set when the host has more pages of rows to deliver.
    """

    columns: tuple[Column, ...]
    rows: tuple[tuple[Any, ...], ...]
    segment: bool = False
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        roles: Mapping[str, str | Sequence[str]],
        segment: bool = False,
    ) -> "DataView":
        """Build a data view from a DataFrame.

        Args:
            df: One row per entity and time key.
            roles: Column name to role tag (or list of tags).
            segment: Whether more pages remain.

        Returns:
            DataView with columns in DataFrame order.
        """
        columns = []
        for name in df.columns:
            tags = roles.get(name, ())
            if isinstance(tags, str):
                tags = (tags,)
            columns.append(Column(name=str(name), roles=frozenset(tags)))
        frame = df.astype(object).where(pd.notna(df), None)
        rows = tuple(tuple(row) for row in frame.itertuples(index=False, name=None))
        return cls(columns=tuple(columns), rows=rows, segment=segment)
