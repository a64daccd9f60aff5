from typing import Any, Mapping

import pandas as pd

from barrace.anims.create_bar_animation import create_bar_animation, plot_snapshot
from barrace.data.dataview import DataView


def create_bar_animation_wrapper(
    df: pd.DataFrame,
    roles: Mapping[str, list[str]],
    settings: Mapping[str, Any] | None,
    width: float,
    height: float,
    dpi: float,
    interp_steps: int,
    max_ticks: int | None,
):
    """Thin wrapper building a data view and passing through to ``create_bar_animation``.

    Args:
        df (pandas.DataFrame): Session rows in file order.
        roles: Column name to role tags.
        settings: Visual options.
        width, height: Viewport in pixels.
        dpi (int): Render DPI; affects resolution.
        interp_steps (int): Frames per transition.
        max_ticks: Optional cap on timer fires.

    Returns:
        matplotlib.animation.FuncAnimation: The configured animation.
    """
    return create_bar_animation(
        DataView.from_frame(df, roles),
        settings,
        width=width,
        height=height,
        dpi=dpi,
        interp_steps=interp_steps,
        max_ticks=max_ticks,
    )


def plot_snapshot_wrapper(
    df: pd.DataFrame,
    roles: Mapping[str, list[str]],
    settings: Mapping[str, Any] | None,
    time_key: float | None,
    width: float,
    height: float,
    dpi: float,
):
    """Thin wrapper around ``plot_snapshot``.

    Returns:
        matplotlib.figure.Figure: The generated figure.
    """
    return plot_snapshot(
        DataView.from_frame(df, roles),
        settings,
        time_key=time_key,
        width=width,
        height=height,
        dpi=dpi,
    )
