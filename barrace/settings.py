"""Visual options and their parsing from host property objects."""

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .data.normalize_inputs import normalize_option

logger = logging.getLogger(__name__)

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off", ""}


@dataclass(frozen=True)
class VisualOptions:
    bar_label_color: str = "#cdcdcd"
    text_color: str = "#cdcdcd"
    font_family: str = "Verdana"
    year_size: float = 18.0
    month_size: float = 12.0
    bars_to_show: int = 12
    interval_timing: float = 2000.0
    value_format: str = ""
    show_controls: bool = False
    repeat_loop: bool = False


def _coerce(name: str, default: Any, raw: Any) -> Any:
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ValueError(f"{name}: expected a boolean, got {raw!r}")
    if isinstance(default, (int, float)):
        number = float(raw)
        if not math.isfinite(number):
            raise ValueError(f"{name}: expected a finite number, got {raw!r}")
        return int(number) if isinstance(default, int) else number
    return "" if raw is None else str(raw)


def parse_settings(objects: Mapping[str, Any] | None) -> VisualOptions:
    """Build VisualOptions from a host mapping.

    Accepts camelCase (``barsToShow``) or snake_case keys, optionally nested
    under ``mainOptions``. Values that fail to coerce keep their default.

    Args:
        objects: Host property values.

    Returns:
        VisualOptions with defaults for anything missing.
    """
    options = VisualOptions()
    if not objects:
        return options
    if isinstance(objects.get("mainOptions"), Mapping):
        objects = objects["mainOptions"]

    known = {f.name: f.default for f in fields(VisualOptions)}
    updates: dict[str, Any] = {}
    for key, raw in objects.items():
        name = normalize_option(key)
        if name not in known:
            logger.debug("Ignoring unknown option %r", key)
            continue
        try:
            updates[name] = _coerce(name, known[name], raw)
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning("Option %r=%r ignored: %s", key, raw, e)

    if "bars_to_show" in updates:
        updates["bars_to_show"] = max(1, updates["bars_to_show"])
    if "interval_timing" in updates:
        updates["interval_timing"] = max(1.0, updates["interval_timing"])
    return replace(options, **updates)
