"""Value label formatting.

Bar value labels take a d3-format style pattern (``",.1f"``, ``"$.2s"``,
``".0%"``) from the visual options. Patterns are compiled once into a plain
``float -> str`` callable. A pattern that does not parse is reported once and
replaced by the default grouping format.
"""

import logging
import math
import re
from typing import Callable

from .cache import error_logged

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = ","

_SPEC_RE = re.compile(
    r"^(?:(?P<fill>.)?(?P<align>[<>=^]))?"
    r"(?P<sign>[-+( ])?"
    r"(?P<symbol>[$#])?"
    r"(?P<zero>0)?"
    r"(?P<width>\d+)?"
    r"(?P<comma>,)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<trim>~)?"
    r"(?P<type>[bcdeEfFgGnoprsxX%])?$"
)

_SI_PREFIXES = {
    -24: "y",
    -21: "z",
    -18: "a",
    -15: "f",
    -12: "p",
    -9: "n",
    -6: "µ",
    -3: "m",
    0: "",
    3: "k",
    6: "M",
    9: "G",
    12: "T",
    15: "P",
    18: "E",
    21: "Z",
    24: "Y",
}

Formatter = Callable[[float], str]


def _trim_zeros(text: str) -> str:
    match = re.match(r"^(\d[\d,]*)\.(\d*?)0+((?:e[+-]\d+)?\D*)$", text)
    if match is None:
        return text
    whole, frac, rest = match.groups()
    return f"{whole}.{frac}{rest}" if frac else f"{whole}{rest}"


def _si(value: float, precision: int | None) -> str:
    digits = 6 if precision is None else max(1, precision)
    if value == 0:
        return format(0.0, f".{digits}g")
    exponent = int(math.floor(math.log10(value) / 3) * 3)
    exponent = max(-24, min(24, exponent))
    scaled = value / 10**exponent
    body = format(scaled, f".{digits}g")
    # rounding can carry into the next prefix, e.g. 999.99k -> 1000k
    if float(body) >= 1000 and exponent < 24:
        exponent += 3
        body = format(value / 10**exponent, f".{digits}g")
    return body + _SI_PREFIXES[exponent]


def _body(value: float, parts: dict, comma: str) -> str:
    kind = parts["type"]
    precision = parts["precision"]
    prec = int(precision) if precision is not None else None

    if kind is None:
        if prec is None:
            text = format(value, f"{comma}")
            return text[:-2] if text.endswith(".0") else text
        return format(value, f"{comma}.{max(1, prec)}g")
    if kind == "d":
        return format(int(round(value)), f"{comma}d")
    if kind in "xXob":
        return format(int(round(value)), kind)
    if kind == "c":
        return str(value)
    if kind == "s":
        return _si(value, prec)
    if kind == "n":
        return format(value, f",.{prec if prec is not None else 12}g")
    if kind in "rp":
        digits = 12 if prec is None else max(1, prec)
        if kind == "p":
            return format(value * 100, f"{comma}.{digits}g") + "%"
        return format(value, f"{comma}.{digits}g")
    if kind in "gG":
        digits = 6 if prec is None else max(1, prec)
        return format(value, f"{comma}.{digits}{kind}")
    return format(value, f"{comma}.{6 if prec is None else prec}{kind}")


def parse_format(pattern: str) -> Formatter:
    """Compile a d3-format style pattern.

    Args:
        pattern: Pattern such as ``",.0f"``. Empty means ``DEFAULT_FORMAT``.

    Returns:
        Callable turning a number into its display string.

    Raises:
        ValueError: If the pattern is not a valid format specifier.
    """
    match = _SPEC_RE.match(pattern or DEFAULT_FORMAT)
    if match is None:
        raise ValueError(f"invalid format: {pattern!r}")
    parts = match.groupdict()
    fill = parts["fill"] or (" " if not parts["zero"] else "0")
    align = parts["align"] or (">" if not parts["zero"] else "=")
    sign_mode = parts["sign"] or "-"
    width = int(parts["width"]) if parts["width"] else 0
    comma = "," if parts["comma"] else ""
    currency = "$" if parts["symbol"] == "$" else ""

    def formatter(value: float) -> str:
        value = float(value)
        if math.isnan(value):
            return "NaN"
        negative = value < 0 or (value == 0 and math.copysign(1.0, value) < 0)
        body = _body(abs(value), parts, comma)
        if parts["trim"]:
            body = _trim_zeros(body)
        if negative and body.strip("0.,%") == "":
            negative = False

        if negative:
            prefix, suffix = ("(", ")") if sign_mode == "(" else ("-", "")
        else:
            prefix = {"+": "+", " ": " "}.get(sign_mode, "")
            suffix = ""
        prefix += currency

        padding = width - len(prefix) - len(body) - len(suffix)
        if padding <= 0:
            return prefix + body + suffix
        if align == "=":
            return prefix + fill * padding + body + suffix
        text = prefix + body + suffix
        if align == "<":
            return text + fill * padding
        if align == "^":
            left = padding // 2
            return fill * left + text + fill * (padding - left)
        return fill * padding + text

    # surface bad python specs at compile time rather than mid-animation
    formatter(1234.5678)
    return formatter


def compile_format(pattern: str) -> Formatter:
    """Compile ``pattern``, falling back to the default on error.

    A bad pattern is logged once per process.
    """
    try:
        return parse_format(pattern)
    except ValueError as e:
        key = f"format:{pattern}"
        if key not in error_logged:
            error_logged.add(key)
            logger.warning("Invalid valueFormat %r (%s); using %r", pattern, e, DEFAULT_FORMAT)
        return parse_format(DEFAULT_FORMAT)
