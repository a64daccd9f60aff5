"""Plot styling helpers for visuals."""

import matplotlib.pyplot as plt


def setup_race_axes(ax: plt.Axes, width: float, height: float) -> None:
    """Turn ``ax`` into a pixel canvas with the origin at the top left."""
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_position([0, 0, 1, 1])
    for side in ("top", "right", "bottom", "left"):
        ax.spines[side].set_visible(False)
    ax.tick_params(
        axis="x",
        which="both",
        top=False,
        bottom=False,
        labeltop=True,
        labelbottom=False,
        labelsize=9,
        labelcolor="grey",
        pad=-12,
    )
    ax.tick_params(axis="y", left=False, labelleft=False)
    ax.grid(axis="x", color="#dddddd", linewidth=1)
    ax.set_axisbelow(True)
