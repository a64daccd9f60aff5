"""Color utilities for visuals."""

from matplotlib import colormaps
from matplotlib.colors import to_hex

from .cache import ColorCache


class ColorPalette:
    """Hands out qualitative colormap entries in order of first request.

    Args:
        cmap_name: Name of a listed matplotlib colormap.
        cache: Optional ColorCache to share across palettes.
    """

    def __init__(self, cmap_name: str = "tab20", cache: ColorCache | None = None) -> None:
        cmap = colormaps[cmap_name]
        count = getattr(cmap, "N", 20)
        self._colors = [to_hex(cmap(i)) for i in range(count)]
        self.cache = cache if cache is not None else ColorCache()

    def _next_color(self, name: str) -> str:
        return self._colors[len(self.cache) % len(self._colors)]

    def get_color(self, name: str) -> str:
        """Return the stable hex color for ``name``.

        Args:
            name: Entity name.

        Returns:
            Hex string like ``"#1f77b4"``.
        """
        return self.cache.get(name, self._next_color)
