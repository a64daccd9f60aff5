import logging
import time

import matplotlib.pyplot as plt
from matplotlib import animation
from matplotlib.animation import FFMpegWriter, FuncAnimation, PillowWriter

from barrace.core.constants import facecolor

logger = logging.getLogger(__name__)

FORMATS = {"gif": "image/gif", "mp4": "video/mp4"}


def encode_animation(anim: FuncAnimation, out_path: str, fps: int, fmt: str = "gif") -> None:
    """Encode ``anim`` to ``out_path``.

    GIFs go through Pillow; MP4 needs an ffmpeg binary on PATH.

    Raises:
        ValueError: For an unsupported format.
        RuntimeError: If ffmpeg is required but not available.
    """
    if fmt not in FORMATS:
        raise ValueError(f"unsupported format {fmt!r}")
    fig = getattr(anim, "_fig", None)
    t0 = time.perf_counter()
    try:
        logger.info("encode_animation start fmt=%s fps=%s out=%s", fmt, fps, out_path)
        if fmt == "mp4":
            if not animation.writers.is_available("ffmpeg"):
                raise RuntimeError("ffmpeg is not available for MP4 encoding")
            writer = FFMpegWriter(fps=fps, codec="libx264", extra_args=["-pix_fmt", "yuv420p"])
        else:
            writer = PillowWriter(fps=fps)
        anim.save(out_path, writer=writer, savefig_kwargs={"facecolor": facecolor})
    finally:
        if fig is not None:
            plt.close(fig)
        logger.info("encode_animation end -> %s (%.2fs)", out_path, time.perf_counter() - t0)
