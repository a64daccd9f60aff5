"""Matplotlib rendering target for reconciliation plans.

Each bound entity owns a bar, a name label and a value label. ``apply``
takes a plan plus the scale it should land on; ``render(t)`` places every
artist at fraction ``t`` of the transition and removes exiting artists
once ``t`` reaches 1.
"""

from dataclasses import dataclass
from typing import Callable

import matplotlib.patheffects as path_effects
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from matplotlib.text import Text

from ..core.constants import MARGIN_RIGHT
from ..core.fonts import get_fonts
from ..core.style import setup_race_axes
from ..settings import VisualOptions
from .reconcile import Instruction, ReconcilePlan
from .scale import ScaleModel
from .snapshot import Snapshot


@dataclass
class BarArtists:
    bar: Rectangle
    label: Text
    value_label: Text

    def remove(self) -> None:
        self.bar.remove()
        self.label.remove()
        self.value_label.remove()


class RaceScene:
    """Scene graph for one viewport.

    Args:
        ax: Axes to draw into; it is turned into a pixel canvas.
        width: Viewport width in pixels.
        height: Viewport height in pixels.
        options: Visual options (colors, fonts, controls).
        value_formatter: Formats bar values.
    """

    def __init__(
        self,
        ax: plt.Axes,
        width: float,
        height: float,
        options: VisualOptions,
        value_formatter: Callable[[float], str],
    ) -> None:
        self.ax = ax
        self.width = width
        self.height = height
        self.options = options
        self.format_value = value_formatter
        self.bars: dict[str, BarArtists] = {}
        self.plan: ReconcilePlan | None = None
        self.scale: ScaleModel | None = None
        self._from_scale: ScaleModel | None = None
        self.period_text: Text | None = None
        self.sub_period_text: Text | None = None
        self.control_text: Text | None = None
        self.message_text: Text | None = None
        self.period_font, self.sub_period_font, self.label_font = get_fonts(
            options.font_family, options.year_size, options.month_size
        )
        self._build_static()

    def _build_static(self) -> None:
        self.ax.clear()
        self.bars = {}
        setup_race_axes(self.ax, self.width, self.height)
        self.period_text = self.ax.text(
            self.width - MARGIN_RIGHT,
            self.height - 35,
            "",
            ha="right",
            va="baseline",
            color=self.options.text_color,
            fontproperties=self.period_font,
            zorder=5,
        )
        self.period_text.set_path_effects(
            [path_effects.withStroke(linewidth=10, foreground="#ffffff"), path_effects.Normal()]
        )
        self.sub_period_text = self.ax.text(
            self.width,
            self.height - 15,
            "",
            ha="right",
            va="baseline",
            color=self.options.text_color,
            fontproperties=self.sub_period_font,
            zorder=5,
        )
        self.control_text = self.ax.text(
            self.width, 15, "", ha="right", va="baseline", color="grey", zorder=5
        )
        self.message_text = None

    def show_message(self, message: str) -> None:
        """Clear the scene and show a single centered message."""
        self._build_static()
        self.plan = None
        self.scale = self._from_scale = None
        self.message_text = self.ax.text(
            self.width / 2, self.height / 2, message, ha="center", va="center", color="grey"
        )

    def set_control_label(self, label: str) -> None:
        self.control_text.set_text(label)

    def set_period(self, snapshot: Snapshot) -> None:
        """Show the leader's period labels; an empty snapshot keeps the last ones."""
        leader = snapshot.leader
        if leader is None:
            return
        self.period_text.set_text(leader.period_label)
        self.sub_period_text.set_text(leader.sub_period_label)

    def _new_bar(self, ins: Instruction) -> BarArtists:
        bar = Rectangle((0, 0), 0, 0, facecolor=ins.record.color, edgecolor="none", zorder=2)
        self.ax.add_patch(bar)
        label = self.ax.text(
            0,
            0,
            ins.record.name,
            ha="right",
            va="center",
            color=self.options.bar_label_color,
            fontproperties=self.label_font,
            zorder=3,
            clip_on=True,
        )
        value_label = self.ax.text(0, 0, "", ha="left", va="center", zorder=3, clip_on=True)
        return BarArtists(bar=bar, label=label, value_label=value_label)

    def apply(self, plan: ReconcilePlan, scale: ScaleModel) -> None:
        """Start a transition towards ``scale``.

        Any previous transition is completed first so artists start from
        where they were last placed.
        """
        if self.plan is not None:
            self.render(1.0)
        self._from_scale = self.scale or scale
        self.scale = scale
        self.plan = plan
        for ins in plan.entering:
            if ins.key not in self.bars:
                self.bars[ins.key] = self._new_bar(ins)
        self.ax.set_xticks([scale.x(t) for t in scale.ticks()])
        self.ax.set_xticklabels([f"{t:,.0f}" for t in scale.ticks()])

    def _x(self, value: float, t: float) -> tuple[float, float]:
        start = self._from_scale
        end = self.scale
        domain_max = start.value_domain[1] + (end.value_domain[1] - start.value_domain[1]) * t
        left = end.x(0)
        right = end.value_range[1]
        return left, left + (right - left) * value / domain_max

    def render(self, t: float) -> None:
        """Place every artist at fraction ``t`` of the current transition."""
        if self.plan is None or self.scale is None:
            return
        scale = self.scale
        for ins in self.plan:
            artists = self.bars.get(ins.key)
            if artists is None:
                continue
            rank, value = ins.at(t)
            left, right = self._x(value, t)
            top = scale.bar_top(rank)
            artists.bar.set_bounds(left + 1, top, max(0.0, right - left - 1), scale.bar_height)
            center = top + scale.bar_height / 2
            artists.label.set_position((right - 8, center))
            artists.value_label.set_position((right + 5, center))
            artists.value_label.set_text(self.format_value(value))

        if t >= 1.0:
            for ins in self.plan.exiting:
                artists = self.bars.pop(ins.key, None)
                if artists is not None:
                    artists.remove()
            self.plan = None

    def hit_test(self, x: float, y: float) -> str | None:
        """Return the key of the bar under pixel ``(x, y)``, if any."""
        for key, artists in self.bars.items():
            bx, by = artists.bar.get_xy()
            if bx <= x <= bx + artists.bar.get_width() and by <= y <= by + artists.bar.get_height():
                return key
        return None

    def artists(self) -> list:
        items = [self.period_text, self.sub_period_text, self.control_text]
        for artists in self.bars.values():
            items.extend([artists.bar, artists.label, artists.value_label])
        return items
