"""Pixel-space scales for one snapshot."""

from dataclasses import dataclass

from matplotlib.ticker import MaxNLocator

from ..core.constants import (
    BAR_OFFSET,
    LABEL_RESERVE,
    MARGIN_BOTTOM,
    MARGIN_LEFT,
    MARGIN_RIGHT,
    MARGIN_TOP,
    TICKS_NARROW,
    TICKS_WIDE,
    WIDE_VIEWPORT,
)
from .snapshot import Snapshot


@dataclass(frozen=True)
class Margins:
    top: float = MARGIN_TOP
    right: float = MARGIN_RIGHT
    bottom: float = MARGIN_BOTTOM
    left: float = MARGIN_LEFT


class ScaleModel:
    """Value and rank scales for a viewport.

    Screen y grows downwards, so rank 0 maps to the top margin and rank
    ``top_n`` to the bottom edge.

    Args:
        snapshot: Snapshot whose largest value fixes the value domain.
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        top_n: Number of bar slots.
        margins: Viewport margins.
        label_reserve: Room kept right of the longest bar for its value.
    """

    def __init__(
        self,
        snapshot: Snapshot,
        width: float,
        height: float,
        top_n: int,
        margins: Margins | None = None,
        label_reserve: float = LABEL_RESERVE,
    ) -> None:
        self.width = width
        self.height = height
        self.top_n = max(1, top_n)
        self.margins = margins or Margins()
        max_value = snapshot.max_value
        self.value_domain = (0.0, max_value if max_value > 0 else 1.0)
        self.value_range = (
            self.margins.left,
            width - self.margins.right - label_reserve,
        )
        self.rank_domain = (float(self.top_n), 0.0)
        self.rank_range = (height - self.margins.bottom, self.margins.top)

    @staticmethod
    def _linear(v: float, domain: tuple[float, float], rng: tuple[float, float]) -> float:
        d0, d1 = domain
        r0, r1 = rng
        return r0 + (v - d0) / (d1 - d0) * (r1 - r0)

    def x(self, value: float) -> float:
        return self._linear(value, self.value_domain, self.value_range)

    def y(self, rank: float) -> float:
        return self._linear(rank, self.rank_domain, self.rank_range)

    @property
    def tick_count(self) -> int:
        return TICKS_WIDE if self.width > WIDE_VIEWPORT else TICKS_NARROW

    def ticks(self) -> list[float]:
        locator = MaxNLocator(nbins=self.tick_count, min_n_ticks=1)
        lo, hi = self.value_domain
        return [float(t) for t in locator.tick_values(lo, hi) if lo <= t <= hi]

    @property
    def exit_rank(self) -> int:
        return self.top_n + 1

    @property
    def slot_height(self) -> float:
        return self.y(1) - self.y(0)

    @property
    def bar_padding(self) -> float:
        return (self.height - (self.margins.bottom + self.margins.top)) / (self.top_n * 5)

    @property
    def bar_height(self) -> float:
        return self.slot_height - self.bar_padding

    def bar_width(self, value: float) -> float:
        return max(0.0, self.x(value) - self.x(0) - 1)

    def bar_top(self, rank: float) -> float:
        return self.y(rank) + BAR_OFFSET
