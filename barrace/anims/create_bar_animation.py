"""Offline export of a bar chart race.

Plays the scheduler against a VirtualClock and renders every transition
into ``interp_steps`` frames of a FuncAnimation.
"""

import logging
from typing import Any, Iterator, Mapping

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation
from matplotlib.figure import Figure

from ..core.constants import dpi as default_dpi
from ..core.constants import facecolor, interp_steps as default_interp_steps
from ..data.dataview import DataView
from ..data.roles import map_roles
from ..visual import Visual, default_host
from .clock import VirtualClock
from .state import Status

logger = logging.getLogger(__name__)


def _new_figure(width: float, height: float, dpi: float) -> tuple[Figure, plt.Axes]:
    fig, ax = plt.subplots(figsize=(width / dpi, height / dpi), dpi=dpi)
    fig.patch.set_facecolor(facecolor)
    ax.set_facecolor(facecolor)
    return fig, ax


def _load(
    data_view: DataView,
    objects: Mapping[str, Any] | None,
    width: float,
    height: float,
    dpi: float,
) -> tuple[Figure, Visual, VirtualClock]:
    # fail before any figure is created when fields are missing
    map_roles(data_view.columns)
    fig, ax = _new_figure(width, height, dpi)
    clock = VirtualClock()
    visual = Visual(ax, default_host(), clock)
    visual.update(data_view, (width, height), objects)
    return fig, visual, clock


def count_ticks(visual: Visual, max_ticks: int | None = None) -> int:
    """Number of timer fires to export.

    Without looping this covers the whole series; with looping it covers
    one pass back to the first key.
    """
    scheduler = visual.scheduler
    if scheduler is None or scheduler.store.is_empty:
        return 0
    store = scheduler.store
    ticks = int(round((store.max_key - store.min_key) / scheduler.step)) + 1
    if max_ticks is not None:
        ticks = min(ticks, max(0, max_ticks))
    return ticks


def create_bar_animation(
    data_view: DataView,
    objects: Mapping[str, Any] | None,
    width: float = 960,
    height: float = 540,
    dpi: float = default_dpi,
    interp_steps: int = default_interp_steps,
    max_ticks: int | None = None,
) -> FuncAnimation:
    """Build the animation for a whole playback.

    Args:
        data_view: Columns and rows with role tags.
        objects: Visual options.
        width, height: Viewport in pixels.
        dpi: Figure DPI.
        interp_steps: Frames rendered per transition.
        max_ticks: Optional cap on timer fires.

    Returns:
        matplotlib.animation.FuncAnimation over the exported frames.

    Raises:
        MissingRoleError: If the data view lacks a required role.
    """
    fig, visual, clock = _load(data_view, objects, width, height, dpi)
    ticks = count_ticks(visual, max_ticks)
    steps = max(1, interp_steps)
    fractions = np.linspace(1.0 / steps, 1.0, steps)
    logger.info("Exporting %d ticks x %d frames", ticks, steps)

    def frames() -> Iterator[float]:
        yield 1.0
        for _ in range(ticks):
            if not clock.step() or visual.scheduler.status is Status.FINISHED:
                return
            for t in fractions:
                yield float(t)

    def draw(t: float) -> list:
        visual.scene.render(t)
        return visual.scene.artists()

    interval = visual.options.interval_timing / steps
    anim = FuncAnimation(
        fig,
        draw,
        frames=frames,
        interval=interval,
        repeat=False,
        blit=False,
        cache_frame_data=False,
        save_count=ticks * steps + 1,
    )
    anim.visual = visual
    return anim


def plot_snapshot(
    data_view: DataView,
    objects: Mapping[str, Any] | None,
    time_key: float | None = None,
    width: float = 960,
    height: float = 540,
    dpi: float = default_dpi,
) -> Figure:
    """Render one snapshot as a static figure.

    Args:
        time_key: Key to show; defaults to the last key of the series.

    Returns:
        matplotlib.figure.Figure with the ranked bars.
    """
    fig, visual, _ = _load(data_view, objects, width, height, dpi)
    if visual.scheduler is not None and not visual.scheduler.store.is_empty:
        key = visual.scheduler.store.max_key if time_key is None else time_key
        visual.show_snapshot(key)
    return fig
