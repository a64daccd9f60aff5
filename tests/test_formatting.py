from __future__ import annotations

import logging

import pytest

from barrace.core.cache import error_logged
from barrace.core.formatting import compile_format, parse_format


@pytest.mark.parametrize(
    ("pattern", "value", "expected"),
    [
        ("", 1234.5, "1,234.5"),
        ("", 1234.0, "1,234"),
        (",", 1234567, "1,234,567"),
        (",.1f", 1234.56, "1,234.6"),
        (".0%", 0.123, "12%"),
        ("$,.2f", -1234.5, "-$1,234.50"),
        (".2s", 1500, "1.5k"),
        ("d", 2.6, "3"),
        (",d", 1234.4, "1,234"),
        (".3~f", 1.5, "1.5"),
        ("(,.0f", -1000, "(1,000)"),
        ("+.1f", 2, "+2.0"),
        ("08.2f", 3.14159, "00003.14"),
        ("*^9d", 42, "***42****"),
        (".2e", 12345, "1.23e+04"),
        ("x", 255, "ff"),
    ],
)
def test_patterns(pattern: str, value: float, expected: str) -> None:
    assert parse_format(pattern)(value) == expected


def test_negative_zero_has_no_sign() -> None:
    assert parse_format(".0f")(-0.2) == "0"


def test_invalid_pattern_raises() -> None:
    with pytest.raises(ValueError):
        parse_format("not a format")


def test_invalid_pattern_falls_back_and_logs_once(caplog) -> None:
    pattern = "#bogus#"
    error_logged.discard(f"format:{pattern}")

    with caplog.at_level(logging.WARNING, logger="barrace.core.formatting"):
        first = compile_format(pattern)
        second = compile_format(pattern)

    assert first(1234.5) == "1,234.5"
    assert second(98765) == "98,765"
    assert caplog.text.count("Invalid valueFormat") == 1
