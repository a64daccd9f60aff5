"""Session caches and error tracking for visuals.

``error_logged`` is shared across modules so a bad option is reported once
per process rather than once per tick.
"""

from typing import Callable

error_logged: set[str] = set()


class ColorCache:
    """Append-only ``name -> color`` mapping.

    A color is stored the first time a name is seen and is never replaced,
    so every snapshot of a session draws an entity in the same color.
    """

    def __init__(self) -> None:
        self._colors: dict[str, str] = {}

    def get(self, name: str, resolve: Callable[[str], str]) -> str:
        color = self._colors.get(name)
        if color is None:
            color = resolve(name)
            self._colors[name] = color
        return color

    def __contains__(self, name: object) -> bool:
        return name in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def as_dict(self) -> dict[str, str]:
        return dict(self._colors)
